from .request_observer import ManifestRequestObserver
from .shared_browser import SharedBrowserPool

__all__ = ["ManifestRequestObserver", "SharedBrowserPool"]
