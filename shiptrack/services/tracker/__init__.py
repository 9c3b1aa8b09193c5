from .coordinator import TrackerCoordinator
from .presenter import render
from .reducer import transition
from .store import SelectionStore

__all__ = ["SelectionStore", "TrackerCoordinator", "render", "transition"]
