import logging
import json
import datetime as dt
from typing import Dict, Any, Optional, Set, Tuple

from alliance_wars.core.errors import GameError

# Attributes every LogRecord carries; anything else on a record came in through `extra=`
LOG_RECORD_BUILTIN_ATTRS: Set[str] = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module", "msecs",
    "message", "msg", "name", "pathname", "process", "processName",
    "relativeCreated", "stack_info", "thread", "threadName", "taskName",
}

# Game context keys; always emitted, null when the caller did not pass them
CONTEXT_KEYS: Tuple[str, ...] = ("player_id", "command", "game_id")


class JSONLogFormatter(logging.Formatter):
    """
    Renders a record as one JSON object per line.

    Layout: `message`, `timestamp`, the `fmt_keys` mapping (output key ->
    LogRecord attribute, e.g. {"level": "levelname"}), the fixed game
    context keys, `error_code` when the logged exception is a GameError,
    and any remaining `extra=` fields nested under "extra".
    """
    def __init__(self, *, fmt_keys: Optional[Dict[str, str]] = None, datefmt: Optional[str] = None):
        super().__init__(datefmt=datefmt)
        self.fmt_keys = fmt_keys if fmt_keys is not None else {}

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self._prepare_log_dict(record), default=str, ensure_ascii=False)

    def _timestamp(self, record: logging.LogRecord) -> str:
        if self.datefmt:
            return self.formatTime(record, self.datefmt)
        return dt.datetime.fromtimestamp(record.created, tz=dt.timezone.utc).isoformat()

    def _prepare_log_dict(self, record: logging.LogRecord) -> Dict[str, Any]:
        computed: Dict[str, Any] = {
            "message": record.getMessage(),
            "timestamp": self._timestamp(record),
        }

        log_dict: Dict[str, Any] = dict(computed)
        for key, attr_name in self.fmt_keys.items():
            if attr_name in computed:
                log_dict[key] = computed[attr_name]
                if key != attr_name:
                    log_dict.pop(attr_name, None)
            else:
                val = getattr(record, attr_name, None)
                if val is not None:
                    log_dict[key] = val

        for key in CONTEXT_KEYS:
            log_dict[key] = getattr(record, key, None)

        if record.exc_info:
            log_dict["exc_info"] = self.formatException(record.exc_info)
            if isinstance(record.exc_info[1], GameError):
                log_dict["error_code"] = record.exc_info[1].code.value
        if record.stack_info:
            log_dict["stack_info"] = self.formatStack(record.stack_info)

        extra = {
            key: val for key, val in record.__dict__.items()
            if key not in LOG_RECORD_BUILTIN_ATTRS and key not in CONTEXT_KEYS and key not in log_dict
        }
        if extra:
            log_dict["extra"] = extra
        return log_dict
