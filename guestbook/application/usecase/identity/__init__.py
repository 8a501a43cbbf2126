"""Identity use cases."""

from .get_viewer import GetViewerRequest, GetViewerUseCase

__all__ = ["GetViewerRequest", "GetViewerUseCase"]
