"""State holders observed by the screens."""

from .local import TareasViewModel
from .remote import TareasRemoteViewModel

__all__ = ["TareasRemoteViewModel", "TareasViewModel"]
