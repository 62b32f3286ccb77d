import json
import logging


class JsonFormatter(logging.Formatter):
    """One JSON object per line; pre-serialized JSON messages are embedded as objects."""

    def format(self, record):
        msg = record.getMessage()
        try:
            body = json.loads(msg) if msg.startswith("{") else None
        except ValueError:
            body = None
        out = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
        }
        if isinstance(body, dict):
            out.update(body)
        else:
            out["msg"] = msg
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, default=str)
