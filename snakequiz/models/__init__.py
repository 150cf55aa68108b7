from .event import Event
from .player import Player
from .answer import Answer
from .log_entry import LogEntry

__all__ = [
	"Event",
	"Player",
	"Answer",
	"LogEntry",
]
