from .manifest import (
    ManifestExtractor,
    extract_manifest_from_html,
    is_manifest_url,
)

__all__ = ["ManifestExtractor", "extract_manifest_from_html", "is_manifest_url"]
