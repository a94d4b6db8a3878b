"""Callback contracts and dependency bag shared by the orchestrator and sections"""

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING, Any, Awaitable, Callable, Dict, Iterable, List, Optional, Protocol, Set,
    Tuple, Union,
)

from openpyxl.worksheet.worksheet import Worksheet

from .enums import LookupKind
from .models import ApplicationInfo

if TYPE_CHECKING:
    from sections.engine import SectionContext


# Lookup fetchers may be plain callables or coroutine functions
LookupFetcher = Callable[[], Union[Iterable[Any], Awaitable[Iterable[Any]]]]

# Step one of extraction: physical header text -> values below it (row 2 onward)
HeaderValues = List[Tuple[str, List[Any]]]

# Step two: column key -> values
ColumnValues = Dict[str, List[Any]]


class SectionWriter(Protocol):
    """Populate data rows and return every row number written"""
    def __call__(self, ctx: "SectionContext", ws: Worksheet) -> Set[int]: ...


class SectionValidator(Protocol):
    """Attach data validation and conditional formatting"""
    def __call__(self, ctx: "SectionContext", ws: Worksheet) -> None: ...


class ValueMapper(Protocol):
    """Rebuild a partial questionnaire dict from extracted column values"""
    def __call__(self, values: ColumnValues, lookups: "LookupData") -> Dict[str, Any]: ...


@dataclass
class LookupData:
    """Reference lists resolved for one parse, keyed for foreign-key matching"""
    institutions: Dict[str, str]
    programs: List[Dict[str, str]]
    funding_agencies: List[str]
    file_types: List[str]
    cancer_types: List[str]
    species: List[str]

    @classmethod
    def empty(cls) -> "LookupData":
        return cls({}, [], [], [], [], [])


@dataclass
class MiddlewareDependencies:
    """Everything the codec needs from the host application"""
    application: Optional[ApplicationInfo] = None
    dev_tier: Optional[str] = None
    get_institutions: Optional[LookupFetcher] = None
    get_programs: Optional[LookupFetcher] = None
    get_funding_agencies: Optional[LookupFetcher] = None
    get_file_types: Optional[LookupFetcher] = None
    get_cancer_types: Optional[LookupFetcher] = None
    get_species: Optional[LookupFetcher] = None

    def fetcher(self, kind: LookupKind) -> Optional[LookupFetcher]:
        return {
            LookupKind.INSTITUTIONS: self.get_institutions,
            LookupKind.PROGRAMS: self.get_programs,
            LookupKind.FUNDING_AGENCIES: self.get_funding_agencies,
            LookupKind.FILE_TYPES: self.get_file_types,
            LookupKind.CANCER_TYPES: self.get_cancer_types,
            LookupKind.SPECIES: self.get_species,
        }[kind]
