# wormbase_gateway/clients/wormbase.py
from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..catalogue import (
    DEFAULT_WIDGETS,
    FALLBACK_SEARCH_TYPES,
    GENE_DEFAULT_WIDGETS,
    INTERACTION_KINDS,
    type_name,
)
from ..ids import infer_type_from_id, is_gene_id, looks_like_id
from ..utils.http import UpstreamError, get_json, new_client
from ..utils.normalize import clean_widget_data

log = logging.getLogger("wormbase.client")

BASE_URL = os.getenv("WORMBASE_BASE_URL", "http://rest.wormbase.org")
SEARCH_URL = "https://wormbase.org/search"
DEFAULT_LIMIT = 10

# Search payloads name their hit list differently across endpoints
_HIT_LIST_KEYS = ("hits", "results", "matches")
_TOTAL_KEYS = ("total", "count")

# ------------------------------------------------------------------------------------
# Models
# ------------------------------------------------------------------------------------
class SearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str
    class_: str = Field(alias="class")
    taxonomy: Optional[str] = None
    description: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResult] = []
    total: int = 0


# ------------------------------------------------------------------------------------
# Payload helpers
# ------------------------------------------------------------------------------------
def _first(*values: Any) -> Any:
    for v in values:
        if v:
            return v
    return None

def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    s = str(value)
    return s or None

def _nested(obj: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj

def _hit_list(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _HIT_LIST_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
    return []

def _reported_total(payload: Any) -> Optional[int]:
    if isinstance(payload, dict):
        for key in _TOTAL_KEYS:
            v = payload.get(key)
            if isinstance(v, int) and not isinstance(v, bool):
                return v
    return None

def _hit_to_result(hit: Any) -> SearchResult:
    hit = hit if isinstance(hit, dict) else {}
    name = hit.get("name")
    return SearchResult(
        id=_text(_first(hit.get("id"), _nested(name, "id"), hit.get("wbid"))) or "",
        label=_text(_first(hit.get("label"), _nested(name, "label"), name if isinstance(name, str) else None)) or "",
        class_=_text(_first(hit.get("class"), hit.get("type"), hit.get("category"))) or "",
        taxonomy=_text(_first(hit.get("taxonomy"), hit.get("species"))),
        description=_text(_first(hit.get("description"), hit.get("summary"))),
    )

def is_error_marker(value: Any) -> bool:
    return isinstance(value, dict) and set(value.keys()) == {"error"}

def has_overview(record: Optional[Dict[str, Any]]) -> bool:
    overview = (record or {}).get("overview")
    return bool(overview) and not is_error_marker(overview)

def extract_label(overview: Any) -> Optional[str]:
    if not isinstance(overview, dict):
        return None
    return _text(_first(
        _nested(overview, "name", "label"),
        _nested(overview, "name", "data", "label"),
        overview.get("label"),
    ))

def extract_description(overview: Any) -> Optional[str]:
    if not isinstance(overview, dict):
        return None
    for key in ("description", "concise_description"):
        value = overview.get(key)
        if isinstance(value, dict):
            value = _first(value.get("data"), value.get("text"))
        text = _text(value)
        if text:
            return text
    return None


# ------------------------------------------------------------------------------------
# Client
# ------------------------------------------------------------------------------------
class WormBaseClient:
    """
    Async client for the WormBase REST widgets and the WormBase search service.

    Accepts an optional httpx.AsyncClient; without one, each public call opens
    and closes its own short-lived client. Nothing is cached between calls.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        search_url: str = SEARCH_URL,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.search_url = search_url.rstrip("/")
        self._http = http

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http is not None:
            yield self._http
            return
        async with new_client() as http:
            yield http

    # -------------------------- URLs --------------------------
    def widget_url(self, entity_type: str, entity_id: str, widget: str) -> str:
        return f"{self.base_url}/rest/widget/{entity_type}/{quote(entity_id, safe='')}/{widget}"

    def field_url(self, entity_type: str, entity_id: str, field: str) -> str:
        return f"{self.base_url}/rest/field/{entity_type}/{quote(entity_id, safe='')}/{field}"

    def search_endpoint(self, query: str, entity_type: Optional[str] = None) -> str:
        return f"{self.search_url}/{entity_type or 'all'}/{quote(query, safe='')}?content-type=application/json"

    # -------------------------- widget fan-out --------------------------
    async def _fetch_widget(self, http: httpx.AsyncClient, entity_type: str, entity_id: str, widget: str) -> Any:
        try:
            data = await get_json(http, self.widget_url(entity_type, entity_id, widget))
        except UpstreamError as e:
            log.warning("widget %s/%s/%s failed: %s", entity_type, entity_id, widget, e)
            return {"error": f"Failed to fetch {widget}"}
        return clean_widget_data(data)

    async def _fetch_widgets(
        self,
        http: httpx.AsyncClient,
        entity_type: str,
        entity_id: str,
        widgets: Sequence[str],
    ) -> Dict[str, Any]:
        requested = list(dict.fromkeys(widgets))
        values = await asyncio.gather(
            *[self._fetch_widget(http, entity_type, entity_id, w) for w in requested]
        )
        return dict(zip(requested, values))

    async def _overview(self, http: httpx.AsyncClient, entity_type: str, entity_id: str) -> Optional[Any]:
        record = await self._fetch_widgets(http, entity_type, entity_id, ["overview"])
        return record["overview"] if has_overview(record) else None

    # -------------------------- public API --------------------------
    async def get_entity(
        self,
        entity_type: Any,
        entity_id: str,
        widgets: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        etype = type_name(entity_type)
        result: Dict[str, Any] = {"id": entity_id, "type": etype}
        async with self._session() as http:
            result.update(await self._fetch_widgets(http, etype, entity_id, widgets if widgets is not None else DEFAULT_WIDGETS))
        return result

    async def resolve_gene_id(self, name: str, http: Optional[httpx.AsyncClient] = None) -> Optional[str]:
        """Best-effort gene name -> WBGene ID through the search service; None when unresolved."""
        if is_gene_id(name):
            return name
        try:
            if http is None:
                async with self._session() as own:
                    payload = await get_json(own, self.search_endpoint(name, "gene"))
            else:
                payload = await get_json(http, self.search_endpoint(name, "gene"))
        except UpstreamError as e:
            log.debug("gene resolution failed for %r: %s", name, e)
            return None
        genes = [r for r in map(_hit_to_result, _hit_list(payload)) if is_gene_id(r.id)]
        wanted = name.strip().casefold()
        for r in genes:
            if r.label.casefold() == wanted:
                return r.id
        # no label match: top-ranked gene
        return genes[0].id if genes else None

    async def get_gene(self, gene_id: str, widgets: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        async with self._session() as http:
            resolved = await self.resolve_gene_id(gene_id, http) or gene_id
            result: Dict[str, Any] = {"id": resolved, "query": gene_id, "type": "gene"}
            result.update(await self._fetch_widgets(http, "gene", resolved, widgets if widgets is not None else GENE_DEFAULT_WIDGETS))
        return result

    async def get_interactions(self, gene_id: str, interaction_type: str = "all") -> Dict[str, Any]:
        async with self._session() as http:
            data = await get_json(http, self.widget_url("gene", gene_id, "interactions"))
        interactions = clean_widget_data(data)
        if interaction_type == "all":
            return interactions
        if interaction_type not in INTERACTION_KINDS or not isinstance(interactions, dict):
            return {}
        if interaction_type in interactions:
            return {interaction_type: interactions[interaction_type]}
        return {}

    async def get_expression(self, gene_id: str) -> Any:
        async with self._session() as http:
            data = await get_json(http, self.widget_url("gene", gene_id, "expression"))
        return clean_widget_data(data)

    async def get_ontology(self, gene_id: str) -> Any:
        async with self._session() as http:
            data = await get_json(http, self.widget_url("gene", gene_id, "ontology"))
        return clean_widget_data(data)

    async def get_field(self, entity_type: Any, entity_id: str, field: str) -> Any:
        async with self._session() as http:
            data = await get_json(http, self.field_url(type_name(entity_type), entity_id, field))
        if isinstance(data, dict) and data.get(field) is not None:
            return data[field]
        return data

    # -------------------------- search --------------------------
    async def search(
        self,
        query: str,
        entity_type: Any = None,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> SearchResponse:
        etype = type_name(entity_type) if entity_type else None
        limit = DEFAULT_LIMIT if limit is None else limit
        term = query.strip()
        async with self._session() as http:
            if looks_like_id(term):
                direct = await self._direct_lookup(http, term, etype)
                if direct is not None:
                    return SearchResponse(query=query, results=[direct], total=1)

            try:
                payload = await get_json(http, self.search_endpoint(term, etype))
            except UpstreamError as e:
                log.info("search endpoint failed for %r, trying direct lookups: %s", term, e)
                return await self._fallback_search(http, query, term, etype)

            results = [_hit_to_result(h) for h in _hit_list(payload)[:max(0, limit)]]
            if not results:
                log.info("search returned no hits for %r, trying direct lookups", term)
                return await self._fallback_search(http, query, term, etype)
            total = _reported_total(payload)
            return SearchResponse(query=query, results=results, total=total if total is not None else len(results))

    async def _direct_lookup(self, http: httpx.AsyncClient, query: str, entity_type: Optional[str]) -> Optional[SearchResult]:
        inferred = entity_type or infer_type_from_id(query)
        if not inferred:
            return None
        overview = await self._overview(http, inferred, query)
        if overview is None:
            return None
        return SearchResult(
            id=query,
            label=extract_label(overview) or query,
            class_=inferred,
            description=extract_description(overview),
        )

    async def _fallback_search(
        self, http: httpx.AsyncClient, query: str, term: str, entity_type: Optional[str]
    ) -> SearchResponse:
        candidates = [entity_type] if entity_type else FALLBACK_SEARCH_TYPES
        for candidate in candidates:
            result = await self._direct_lookup(http, term, candidate)
            if result is not None:
                return SearchResponse(query=query, results=[result], total=1)
        return SearchResponse(query=query, results=[], total=0)
