import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class AuditLogger:
    """Append-only JSONL sink for download-request audit records."""

    def __init__(self, path):
        self.path = Path(path)

    def log_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Append one event. A write failure is logged, never raised."""
        event = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
            "data": data,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(event) + "\n")
        except OSError as e:
            logger.error(f"Failed to write audit event: {e}")

    def get_all_events(self, event_type: str = None) -> List[Dict[str, Any]]:
        """Read events back, optionally only those of one type."""
        events = []
        if not self.path.exists():
            return events

        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    event = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning(f"Skipping corrupt audit line in {self.path}")
                    continue
                if event_type is None or event.get("event_type") == event_type:
                    events.append(event)
        return events
