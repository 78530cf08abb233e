from datetime import datetime

from numbergen.core.modules.numbering.models import NumberFormatConfig, ResetPeriod


def should_reset(config: NumberFormatConfig, now: datetime) -> bool:
    """Check whether `now` falls in a different reset window than `config.last_reset`.

    Windows are calendar components in the timezone of `now`, not elapsed time:
    23:59 and 00:01 on the next day are in different daily windows.
    """
    last = config.last_reset.astimezone(now.tzinfo) if now.tzinfo else config.last_reset
    match config.reset_period:
        case ResetPeriod.DAILY:
            return now.date() != last.date()
        case ResetPeriod.MONTHLY:
            return (now.year, now.month) != (last.year, last.month)
        case ResetPeriod.YEARLY:
            return now.year != last.year
        case _:
            return False
