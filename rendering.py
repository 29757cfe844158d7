"""Human-readable rendering of schedules and user-configured page sections."""

from exceptions import ConfigError
from schemas import EveryInterval, EveryWeekday, IntervalUnit, OneOff, Schedule


def render(schedule: Schedule) -> str:
    """Format a schedule, e.g. "2022-01-04", "every Monday" or "every 3 Days"."""
    if isinstance(schedule, OneOff):
        return schedule.on.isoformat()

    if isinstance(schedule, EveryWeekday):
        return f"every {schedule.weekday.value}"

    if isinstance(schedule, EveryInterval):
        unit = "Weeks" if schedule.unit is IntervalUnit.WEEK else "Days"
        return f"every {schedule.count} {unit}"

    raise TypeError(f"Unknown schedule type: {type(schedule).__name__}")


def fill_template(template: str, section: str, **fields: str) -> str:
    """Substitute `fields` into a section template from the configuration.

    Raises:
        ConfigError: If the template names an unknown field or is malformed
    """
    allowed = ", ".join("{" + name + "}" for name in fields)
    try:
        return template.format(**fields)
    except KeyError as e:
        raise ConfigError(
            f"The {section} template uses unknown field {{{e.args[0]}}}; available: {allowed}"
        ) from e
    except IndexError as e:
        raise ConfigError(
            f"The {section} template uses a positional field {{}}; available: {allowed}"
        ) from e
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(f"The {section} template is malformed: {e}") from e
