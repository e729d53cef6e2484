"""Wikimedia providers.

WikipediaProvider supplies ranked title search and cached page summaries;
CommonsImageProvider supplies raster photos when a page thumbnail is missing
or is a vector icon.  Both talk to a MediaWiki ``api.php`` endpoint through
``fetch_mediawiki_json``.
"""

from src.providers.wiki.commons_provider import CommonsImageProvider
from src.providers.wiki.wikipedia_provider import WikipediaProvider

__all__ = ["CommonsImageProvider", "WikipediaProvider"]
