from lesschanged.model.file import StylesheetFile
from lesschanged.model.records import CacheEntry, ImportRecord

__all__ = ["StylesheetFile", "ImportRecord", "CacheEntry"]
