"""Browse core — path resolution, previews, listings and location summaries."""

from nsbrowse.browse.listing import DirectoryLister
from nsbrowse.browse.locations import BlockLocationAggregator
from nsbrowse.browse.paths import PathResolver
from nsbrowse.browse.preview import FilePreviewReader
from nsbrowse.browse.service import BrowseRequest, BrowseService

__all__ = [
    "BlockLocationAggregator",
    "BrowseRequest",
    "BrowseService",
    "DirectoryLister",
    "FilePreviewReader",
    "PathResolver",
]
