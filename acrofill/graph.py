"""Object graph access for AcroForm extraction and cleanup.

The extractor never touches a PDF library directly. It walks the document
through an :class:`ObjectGraph`, which knows how to dereference indirect
objects, read dictionary entries and mutate the field/annotation arrays.
:class:`PypdfObjectGraph` implements it on top of a pypdf writer.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional, Protocol, Sequence, Union

from pypdf import PdfWriter
from pypdf.generic import IndirectObject, StreamObject

from .utils import get_logger

logger = get_logger(__name__)


class ObjectGraph(Protocol):
    """Read and mutate access to a PDF object graph.

    Keys and name values use the PDF spelling with a leading slash
    (``"/AcroForm"``, ``"/Widget"``).
    """

    def catalog(self) -> Any: ...

    def resolve(self, obj: Any) -> Any: ...

    def raw(self, obj: Any, key: str) -> Any: ...

    def get(self, obj: Any, key: str) -> Any: ...

    def read_string(self, obj: Any) -> Optional[Union[str, bytes]]: ...

    def pages(self) -> Sequence[Any]: ...

    def page_key(self, page: Any) -> Hashable: ...

    def remove_field(self, container: Any, field: Any) -> bool: ...

    def remove_annotation(self, page: Any, field: Any) -> bool: ...


class PypdfObjectGraph:
    """:class:`ObjectGraph` over a :class:`pypdf.PdfWriter`."""

    def __init__(self, writer: PdfWriter) -> None:
        self._writer = writer

    def catalog(self) -> Any:
        return self._writer.root_object

    def resolve(self, obj: Any) -> Any:
        if isinstance(obj, IndirectObject):
            return obj.get_object()
        return obj

    def raw(self, obj: Any, key: str) -> Any:
        obj = self.resolve(obj)
        if obj is None or not hasattr(obj, "get"):
            return None
        return obj.get(key)

    def get(self, obj: Any, key: str) -> Any:
        return self.resolve(self.raw(obj, key))

    def read_string(self, obj: Any) -> Optional[Union[str, bytes]]:
        obj = self.resolve(obj)
        if obj is None:
            return None
        if isinstance(obj, StreamObject):
            return obj.get_data()
        if isinstance(obj, (str, bytes)):
            return obj
        return str(obj)

    def pages(self) -> Sequence[Any]:
        return list(self._writer.pages)

    def page_key(self, page: Any) -> Hashable:
        ref = page if isinstance(page, IndirectObject) else getattr(page, "indirect_reference", None)
        if ref is None:
            return id(page)
        return (ref.idnum, ref.generation)

    def _index_of(self, array: Any, field: Any) -> Optional[int]:
        target = self.resolve(field)
        for index, entry in enumerate(array):
            if entry == field or self.resolve(entry) is target:
                return index
        return None

    def remove_field(self, container: Any, field: Any) -> bool:
        array = self.resolve(container)
        if array is None:
            return False
        index = self._index_of(array, field)
        if index is None:
            logger.debug("Field reference %s not present in form field collection", field)
            return False
        del array[index]
        return True

    def remove_annotation(self, page: Any, field: Any) -> bool:
        annots = self.get(page, "/Annots")
        if annots is None:
            return False
        index = self._index_of(annots, field)
        if index is None:
            logger.debug("Field reference %s not present in page annotations", field)
            return False
        del annots[index]
        return True


__all__ = ["ObjectGraph", "PypdfObjectGraph"]
