"""
WormBase Gateway: tool router.

One catalogue of named tools, shared by the HTTP surface below and by the MCP
server (wormbase_gateway.mcp_server). Every tool:

    1. validates its arguments against a pydantic model (no network on failure)
    2. delegates to WormBaseClient
    3. returns a ToolResponse: one text block of indented JSON plus `isError`

No exception leaves ToolRouter.call_tool; client failures become error
responses carrying the message.

HTTP endpoints (mounted under /v1 by wormbase_gateway.main):
    GET  /tools
    POST /tools/{name}              body: tool arguments
    GET  /resources/entity-types
    GET  /entities/{type}/{id}/fields/{field}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Type

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from ..catalogue import (
    ENTITY_TOOLS,
    ENTITY_TYPES_URI,
    EntityTool,
    EntityType,
    entity_types_document,
)
from ..clients.wormbase import DEFAULT_LIMIT, WormBaseClient
from ..utils.http import UpstreamError

log = logging.getLogger("wormbase.router")

# ============================================================================
# Schemas
# ============================================================================

class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str

class ToolResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    is_error: bool = Field(False, alias="isError")

    @property
    def text(self) -> str:
        return "\n".join(c.text for c in self.content)

class ToolInfo(BaseModel):
    name: str
    description: str
    inputSchema: Dict[str, Any]

# ---------------------------- tool arguments --------------------------------

class SearchArgs(BaseModel):
    query: str = Field(..., min_length=1, description=(
        "Search query - can be a gene name (e.g., 'daf-2', 'unc-13'), WormBase ID "
        "(e.g., 'WBGene00006763'), or natural language description"))
    type: Optional[EntityType] = Field(None, description="Entity type to search for. If not specified, searches all types.")
    limit: int = Field(DEFAULT_LIMIT, ge=1, description="Maximum number of results to return")

class IdArgs(BaseModel):
    id: str = Field(..., min_length=1, description="Gene identifier")

class WidgetArgs(IdArgs):
    widgets: Optional[List[str]] = Field(None, description="Specific widgets to fetch")

class EntityArgs(WidgetArgs):
    type: EntityType = Field(..., description="Entity type")
    id: str = Field(..., min_length=1, description="Entity identifier")

class InteractionArgs(BaseModel):
    id: str = Field(..., min_length=1, description="Gene or protein identifier")
    interaction_type: Literal["genetic", "physical", "regulatory", "all"] = Field(
        "all", description="Type of interactions to retrieve")

# ============================================================================
# Tool registry
# ============================================================================

Handler = Callable[[WormBaseClient, Any], Awaitable[Any]]

@dataclass
class ToolSpec:
    name: str
    description: str
    args_model: Type[BaseModel]
    handler: Handler
    error_label: str

    def info(self) -> ToolInfo:
        return ToolInfo(name=self.name, description=self.description, inputSchema=self.args_model.model_json_schema())


def _entity_args_model(tool_name: str, tool: EntityTool) -> Type[BaseModel]:
    base = WidgetArgs if tool.accepts_widgets else IdArgs
    fields: Dict[str, Any] = {"id": (str, Field(..., min_length=1, description=tool.id_hint))}
    if tool.accepts_widgets:
        fields["widgets"] = (Optional[List[str]], Field(None, description=tool.widget_hint or "Specific widgets to fetch"))
    model_name = "".join(part.capitalize() for part in tool_name.split("_")) + "Args"
    return create_model(model_name, __base__=base, **fields)


def _entity_handler(tool: EntityTool) -> Handler:
    async def handler(client: WormBaseClient, args: Any) -> Any:
        widgets = getattr(args, "widgets", None) if tool.accepts_widgets else None
        if widgets is None:
            widgets = tool.default_widgets
        if tool.resolve_names:
            return await client.get_gene(args.id, widgets)
        return await client.get_entity(tool.entity_type, args.id, widgets)
    return handler


async def _search(client: WormBaseClient, args: SearchArgs) -> Any:
    return await client.search(args.query, args.type, args.limit)

async def _interactions(client: WormBaseClient, args: InteractionArgs) -> Any:
    return await client.get_interactions(args.id, args.interaction_type)

async def _expression(client: WormBaseClient, args: IdArgs) -> Any:
    return await client.get_expression(args.id)

async def _ontology(client: WormBaseClient, args: IdArgs) -> Any:
    return await client.get_ontology(args.id)

async def _entity(client: WormBaseClient, args: EntityArgs) -> Any:
    return await client.get_entity(args.type, args.id, args.widgets)


TOOLS: Dict[str, ToolSpec] = {}

def _register_tools() -> None:
    T = TOOLS
    T["search"] = ToolSpec(
        "search",
        "Search WormBase for genes, proteins, phenotypes, strains, and other biological entities. "
        "Supports natural language queries like 'genes involved in longevity' or specific IDs like "
        "'WBGene00006763'.",
        SearchArgs, _search, "searching WormBase",
    )
    for name, tool in ENTITY_TOOLS.items():
        if name == "get_paper":
            continue
        T[name] = ToolSpec(name, tool.description, _entity_args_model(name, tool), _entity_handler(tool),
                           f"fetching {tool.entity_type}")
    T["get_interactions"] = ToolSpec(
        "get_interactions",
        "Get protein-protein, genetic, or regulatory interactions for a gene or protein.",
        InteractionArgs, _interactions, "fetching interactions",
    )
    T["get_expression"] = ToolSpec(
        "get_expression",
        "Get expression pattern information for a gene including tissue/cell expression, life stage "
        "expression, and expression images.",
        IdArgs, _expression, "fetching expression",
    )
    T["get_ontology"] = ToolSpec(
        "get_ontology",
        "Get Gene Ontology (GO) terms for a gene including molecular function, biological process, "
        "and cellular component annotations.",
        IdArgs, _ontology, "fetching ontology",
    )
    T["get_entity"] = ToolSpec(
        "get_entity",
        "Get information about any WormBase entity type. Use this for entity types not covered by "
        "specific tools.",
        EntityArgs, _entity, "fetching entity",
    )
    paper = ENTITY_TOOLS["get_paper"]
    T["get_paper"] = ToolSpec("get_paper", paper.description, _entity_args_model("get_paper", paper),
                              _entity_handler(paper), "fetching paper")

_register_tools()

# ============================================================================
# Router
# ============================================================================

def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(by_alias=True, exclude_none=True)
    return result

def _dumps(value: Any) -> str:
    return json.dumps(_to_jsonable(value), indent=2, ensure_ascii=False, default=str)

def text_response(text: str, is_error: bool = False) -> ToolResponse:
    return ToolResponse(content=[TextContent(text=text)], is_error=is_error)


class ToolRouter:
    """Validates tool arguments, delegates to the client, wraps every outcome."""

    def __init__(self, client: Optional[WormBaseClient] = None, tools: Optional[Dict[str, ToolSpec]] = None):
        self.client = client or WormBaseClient()
        self.tools = tools if tools is not None else TOOLS
        self.resources: Dict[str, Callable[[], Dict[str, Any]]] = {ENTITY_TYPES_URI: entity_types_document}

    def list_tools(self) -> List[ToolInfo]:
        return [tool.info() for tool in self.tools.values()]

    def read_resource(self, uri: str) -> str:
        if uri not in self.resources:
            raise KeyError(f"Unknown resource: {uri}")
        return _dumps(self.resources[uri]())

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        tool = self.tools.get(name)
        if tool is None:
            return text_response(_dumps({"error": f"Unknown tool: {name}", "tools": sorted(self.tools)}), is_error=True)

        try:
            args = tool.args_model.model_validate(arguments or {})
        except ValidationError as e:
            log.info("tool %s rejected arguments: %s", name, arguments)
            details = [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                for err in e.errors()
            ]
            return text_response(_dumps({"error": f"Invalid arguments for {name}", "details": details}), is_error=True)

        log.info("tool %s called with: %s", name, args.model_dump(exclude_none=True))
        try:
            result = await tool.handler(self.client, args)
        except Exception as e:  # noqa: BLE001
            log.exception("tool %s failed", name)
            return text_response(f"Error {tool.error_label}: {e}", is_error=True)
        return text_response(_dumps(result))


@lru_cache(maxsize=1)
def default_tool_router() -> ToolRouter:
    return ToolRouter()

def get_tool_router() -> ToolRouter:
    return default_tool_router()

# ============================================================================
# HTTP surface
# ============================================================================

router = APIRouter(tags=["WormBase tools"])

@router.get("/tools", response_model=List[ToolInfo])
async def list_tools(tools: ToolRouter = Depends(get_tool_router)) -> List[ToolInfo]:
    return tools.list_tools()

@router.post("/tools/{name}", response_model=ToolResponse, response_model_by_alias=True)
async def call_tool(
    name: str,
    arguments: Optional[Dict[str, Any]] = Body(None),
    tools: ToolRouter = Depends(get_tool_router),
) -> ToolResponse:
    if name not in tools.tools:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")
    return await tools.call_tool(name, arguments)

@router.get("/resources/entity-types")
async def entity_types(tools: ToolRouter = Depends(get_tool_router)) -> Dict[str, Any]:
    return json.loads(tools.read_resource(ENTITY_TYPES_URI))

@router.get("/entities/{entity_type}/{entity_id}/fields/{field}")
async def entity_field(
    entity_type: EntityType,
    entity_id: str,
    field: str,
    tools: ToolRouter = Depends(get_tool_router),
) -> Any:
    try:
        return await tools.client.get_field(entity_type, entity_id, field)
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail={"error": str(e), "url": e.url, "status_code": e.status_code})
