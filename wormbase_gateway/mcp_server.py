#!/usr/bin/env python3
"""MCP server exposing WormBase (C. elegans and related nematodes) over stdio.

Tools:
- search: free-text / identifier search with direct-lookup fallback
- get_gene, get_protein, get_phenotype, get_disease, get_strain, get_variation,
  get_paper: entity widgets, normalized
- get_interactions, get_expression, get_ontology: single gene widgets
- get_entity: any WormBase entity type

Resource:
- wormbase://entity-types

Every tool is a thin shim over ToolRouter.call_tool, which also backs the HTTP
surface in wormbase_gateway.main. stdout carries the protocol, so logs go to
stderr.

Run as:
    python -m wormbase_gateway.mcp_server
"""

import logging
import os
import sys
from typing import Any, List, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from .catalogue import ENTITY_TYPES_URI, EntityType
from .routers.tools import ToolRouter

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
log = logging.getLogger("wormbase.mcp")

mcp = FastMCP("wormbase")
router = ToolRouter()


async def _invoke(name: str, **arguments: Any) -> str:
    response = await router.call_tool(name, {k: v for k, v in arguments.items() if v is not None})
    if response.is_error:
        raise ToolError(response.text)
    return response.text


@mcp.tool()
async def search(query: str, type: Optional[EntityType] = None, limit: int = 10) -> str:
    """Search WormBase for genes, proteins, phenotypes, strains, and other biological entities.

    Supports natural language queries like 'genes involved in longevity' or specific
    IDs like 'WBGene00006763'.

    Args:
        query: Gene name (e.g., 'daf-2', 'unc-13'), WormBase ID (e.g., 'WBGene00006763'),
               or natural language description
        type: Entity type to search for. If not specified, searches all types.
        limit: Maximum number of results to return (default 10)
    """
    return await _invoke("search", query=query, type=type, limit=limit)


@mcp.tool()
async def get_gene(id: str, widgets: Optional[List[str]] = None) -> str:
    """Get detailed information about a C. elegans gene.

    Includes description, function, expression, phenotypes, and orthologs.

    Args:
        id: WormBase ID (e.g., 'WBGene00006763') or gene name (e.g., 'daf-2', 'unc-13')
        widgets: Specific widgets to fetch: overview, expression, phenotype, interactions,
                 homology, sequences, genetics, external_links, references
    """
    return await _invoke("get_gene", id=id, widgets=widgets)


@mcp.tool()
async def get_protein(id: str, widgets: Optional[List[str]] = None) -> str:
    """Get detailed information about a protein including sequence, domains, motifs, and structure.

    Args:
        id: WormBase protein ID
        widgets: Specific widgets to fetch: overview, sequences, motif_details,
                 external_links, references
    """
    return await _invoke("get_protein", id=id, widgets=widgets)


@mcp.tool()
async def get_phenotype(id: str, widgets: Optional[List[str]] = None) -> str:
    """Get detailed information about a phenotype including associated genes, RNAi experiments, and variations.

    Args:
        id: WormBase phenotype ID (e.g., 'WBPhenotype:0000643')
        widgets: Specific widgets to fetch: overview, rnai, variation, transgene, references
    """
    return await _invoke("get_phenotype", id=id, widgets=widgets)


@mcp.tool()
async def get_disease(id: str, widgets: Optional[List[str]] = None) -> str:
    """Get information about human diseases with C. elegans models, including associated genes and orthologs.

    Args:
        id: DOID or WormBase disease ID
        widgets: Specific widgets to fetch: overview, genes, references
    """
    return await _invoke("get_disease", id=id, widgets=widgets)


@mcp.tool()
async def get_strain(id: str, widgets: Optional[List[str]] = None) -> str:
    """Get information about a C. elegans strain including genotype, available from, and associated phenotypes.

    Args:
        id: Strain name (e.g., 'N2', 'CB1370')
        widgets: Specific widgets to fetch: overview, phenotypes, references
    """
    return await _invoke("get_strain", id=id, widgets=widgets)


@mcp.tool()
async def get_variation(id: str, widgets: Optional[List[str]] = None) -> str:
    """Get information about a genetic variation/allele including molecular details, phenotypes, and strains.

    Args:
        id: Allele name (e.g., 'e1370') or WormBase variation ID
        widgets: Specific widgets to fetch: overview, molecular_details, phenotypes, references
    """
    return await _invoke("get_variation", id=id, widgets=widgets)


@mcp.tool()
async def get_interactions(
    id: str,
    interaction_type: Literal["genetic", "physical", "regulatory", "all"] = "all",
) -> str:
    """Get protein-protein, genetic, or regulatory interactions for a gene or protein.

    Args:
        id: Gene or protein identifier
        interaction_type: Type of interactions to retrieve (default "all")
    """
    return await _invoke("get_interactions", id=id, interaction_type=interaction_type)


@mcp.tool()
async def get_expression(id: str) -> str:
    """Get expression pattern information for a gene.

    Includes tissue/cell expression, life stage expression, and expression images.
    """
    return await _invoke("get_expression", id=id)


@mcp.tool()
async def get_ontology(id: str) -> str:
    """Get Gene Ontology (GO) terms for a gene.

    Covers molecular function, biological process, and cellular component annotations.
    """
    return await _invoke("get_ontology", id=id)


@mcp.tool()
async def get_entity(type: EntityType, id: str, widgets: Optional[List[str]] = None) -> str:
    """Get information about any WormBase entity type.

    Use this for entity types not covered by specific tools.

    Args:
        type: Entity type
        id: Entity identifier
        widgets: Specific widgets to fetch
    """
    return await _invoke("get_entity", type=type, id=id, widgets=widgets)


@mcp.tool()
async def get_paper(id: str) -> str:
    """Get information about a scientific paper/publication including authors, abstract, and associated genes.

    Args:
        id: WormBase paper ID (e.g., 'WBPaper00000001') or PubMed ID
    """
    return await _invoke("get_paper", id=id)


@mcp.resource(
    ENTITY_TYPES_URI,
    name="WormBase Entity Types",
    description="List of all entity types available in WormBase",
    mime_type="application/json",
)
def entity_types() -> str:
    return router.read_resource(ENTITY_TYPES_URI)


def main() -> None:
    log.info("WormBase MCP server starting on stdio (%d tools)", len(router.tools))
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
