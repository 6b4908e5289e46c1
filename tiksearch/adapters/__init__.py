from tiksearch.adapters.base import BaseAdapter
from tiksearch.adapters.scrapecreators_adapter import ScrapeCreatorsAdapter

__all__ = ["BaseAdapter", "ScrapeCreatorsAdapter"]
