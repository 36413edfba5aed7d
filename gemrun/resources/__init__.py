"""Asset manifests, loaders and the resource provider."""

from gemrun.resources.loaders import ImageLoader, PlaceholderLoader
from gemrun.resources.manifest import AssetManifest, load_manifest
from gemrun.resources.provider import ResourceProvider

__all__ = [
    "AssetManifest",
    "load_manifest",
    "ResourceProvider",
    "ImageLoader",
    "PlaceholderLoader",
]
