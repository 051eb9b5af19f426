# wheel_catalog/services/facet_service.py
"""
Faceted filtering over the product DataFrame.

Everything here is a pure function of (products, FilterState). The page calls
apply_filters() on every rerun; nothing is cached between calls.
"""
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Dict, List

import pandas as pd

from utils.columns import BRAND, FINISH, OFFSET, PCD, SEARCH_COLUMNS, SIZE, WIDTH

logger = logging.getLogger(__name__)

ALL = "all"
MODE_STANDARD = "standard"
MODE_STAGGERED = "staggered"
MODES = (MODE_STANDARD, MODE_STAGGERED)

# Order matters: each facet's options are narrowed by the ones before it.
INDEPENDENT_FACETS = (BRAND, FINISH, SIZE, PCD)
STANDARD_FACETS = ("Width", "Offset")
FRONT_FACETS = ("Width_Front", "Offset_Front")
REAR_FACETS = ("Width_Rear", "Offset_Rear")
STAGGERED_FACETS = FRONT_FACETS + REAR_FACETS
FACET_NAMES = INDEPENDENT_FACETS + STANDARD_FACETS + STAGGERED_FACETS

# Axis facets all read the same two columns
FACET_COLUMNS = {
    **{name: name for name in INDEPENDENT_FACETS},
    "Width": WIDTH, "Offset": OFFSET,
    "Width_Front": WIDTH, "Offset_Front": OFFSET,
    "Width_Rear": WIDTH, "Offset_Rear": OFFSET,
}

_DIGITS_RE = re.compile(r"(\d+)")


def _initial_facets() -> Dict[str, str]:
    return {name: ALL for name in FACET_NAMES}


@dataclass(frozen=True)
class FilterState:
    search_term: str = ""
    mode: str = MODE_STANDARD
    facets: Dict[str, str] = field(default_factory=_initial_facets)

    def is_constrained(self, name: str) -> bool:
        return self.facets[name] != ALL

    def with_selection(self, name: str, value: str) -> "FilterState":
        if name not in self.facets:
            raise KeyError(f"Unknown facet: {name}")
        return replace(self, facets={**self.facets, name: value})

    def with_search(self, term: str) -> "FilterState":
        return replace(self, search_term=term)

    def mode_facets(self):
        """The facets that take part in filtering for the current mode."""
        axis = STANDARD_FACETS if self.mode == MODE_STANDARD else STAGGERED_FACETS
        return INDEPENDENT_FACETS + axis


@dataclass
class FacetResult:
    state: FilterState
    filtered: pd.DataFrame
    options: Dict[str, List[str]]


def natural_sort_key(value: str):
    """
    Numeric-aware, case-insensitive key so that '9' sorts before '10'.

    Punctuation runs rank before numbers and numbers before letters, so
    negative offsets ('-5', '-10') come ahead of positive ones.
    """
    parts = []
    for chunk in _DIGITS_RE.split(value):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((1, int(chunk), ""))
        elif chunk[0].isalpha():
            parts.append((2, 0, chunk.casefold()))
        else:
            parts.append((0, 0, chunk.casefold()))
    return parts, value


def unique_sorted_values(df: pd.DataFrame, column: str) -> List[str]:
    if df.empty or column not in df.columns:
        return []
    values = {str(v) for v in df[column].tolist() if isinstance(v, str) and v != ""}
    return sorted(values, key=natural_sort_key)


def _column(df: pd.DataFrame, column: str) -> pd.Series:
    if column in df.columns:
        return df[column].astype(str)
    return pd.Series("", index=df.index, dtype=str)


def search_mask(df: pd.DataFrame, term: str) -> pd.Series:
    """Case-insensitive substring match on description, part number and EAN."""
    if not term:
        return pd.Series(True, index=df.index)
    mask = pd.Series(False, index=df.index)
    for column in SEARCH_COLUMNS:
        mask |= _column(df, column).str.contains(term, case=False, regex=False, na=False)
    return mask.astype(bool)


def facet_mask(df: pd.DataFrame, state: FilterState, names) -> pd.Series:
    """AND of the exact-match constraints for the given facets."""
    mask = pd.Series(True, index=df.index)
    for name in names:
        if state.is_constrained(name):
            mask &= _column(df, FACET_COLUMNS[name]) == state.facets[name]
    return mask


def base_filter(df: pd.DataFrame, state: FilterState) -> pd.DataFrame:
    mask = search_mask(df, state.search_term) & facet_mask(df, state, INDEPENDENT_FACETS)
    return df[mask]


def axis_filter(base: pd.DataFrame, state: FilterState) -> pd.DataFrame:
    """
    Applies the width/offset facets of the active mode to the base frame.

    In staggered mode a product is kept when it fits the front constraints OR
    the rear ones, so both wheels of an asymmetric fitment show up together.
    """
    if state.mode == MODE_STANDARD:
        return base[facet_mask(base, state, STANDARD_FACETS)]

    front_active = any(state.is_constrained(name) for name in FRONT_FACETS)
    rear_active = any(state.is_constrained(name) for name in REAR_FACETS)
    if not front_active and not rear_active:
        return base

    matches_front = facet_mask(base, state, FRONT_FACETS)
    matches_rear = facet_mask(base, state, REAR_FACETS)
    if front_active and not rear_active:
        return base[matches_front]
    if rear_active and not front_active:
        return base[matches_rear]
    return base[matches_front | matches_rear]


def available_options(df: pd.DataFrame, state: FilterState, base: pd.DataFrame = None) -> Dict[str, List[str]]:
    """
    Computes the selectable values of every facet.

    Brand -> Finish -> Size -> PCD narrow in that order on top of the search
    term. Width options come from the base frame and each Offset list from the
    base frame narrowed by its own Width only, so front and rear stay
    independent of each other.
    """
    options = {}
    upstream = df[search_mask(df, state.search_term)]
    for name in INDEPENDENT_FACETS:
        options[name] = unique_sorted_values(upstream, FACET_COLUMNS[name])
        upstream = upstream[facet_mask(upstream, state, (name,))]

    if base is None:
        base = base_filter(df, state)
    for width_name, offset_name in (STANDARD_FACETS, FRONT_FACETS, REAR_FACETS):
        options[width_name] = unique_sorted_values(base, WIDTH)
        narrowed = base[facet_mask(base, state, (width_name,))]
        options[offset_name] = unique_sorted_values(narrowed, OFFSET)
    return options


def reconcile_filters(df: pd.DataFrame, state: FilterState) -> FilterState:
    """Resets stale selections of the current mode until the state is stable."""
    while True:
        options = available_options(df, state)
        stale = [
            name for name in state.mode_facets()
            if state.is_constrained(name) and state.facets[name] not in options[name]
        ]
        if not stale:
            return state
        for name in stale:
            logger.debug(f"Resetting stale selection {name}={state.facets[name]!r}")
            state = state.with_selection(name, ALL)


def switch_mode(state: FilterState, mode: str) -> FilterState:
    """Changes the filter mode, clearing the width/offset facets of the other mode."""
    if mode not in MODES:
        raise ValueError(f"Unknown filter mode: {mode}")
    if mode == state.mode:
        return state
    cleared = STAGGERED_FACETS if mode == MODE_STANDARD else STANDARD_FACETS
    facets = {**state.facets, **{name: ALL for name in cleared}}
    return replace(state, mode=mode, facets=facets)


def reset_filters(mode: str = MODE_STANDARD) -> FilterState:
    return FilterState(mode=mode)


def is_any_filter_active(state: FilterState) -> bool:
    if state.search_term:
        return True
    return any(state.is_constrained(name) for name in state.mode_facets())


def apply_filters(df: pd.DataFrame, state: FilterState) -> FacetResult:
    state = reconcile_filters(df, state)
    base = base_filter(df, state)
    filtered = axis_filter(base, state)
    options = available_options(df, state, base=base)
    return FacetResult(state=state, filtered=filtered, options=options)
