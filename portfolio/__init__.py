"""Academic portfolio site: publications, previews and download requests."""
from .catalog import PublicationCatalog
from .config import Config
from .models import Publication

__version__ = "1.0.0"
__all__ = ["PublicationCatalog", "Config", "Publication"]
