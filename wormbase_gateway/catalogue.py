from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# ------------------------------------------------------------------------------
# Entity types (WormBase classes)
# ------------------------------------------------------------------------------

class EntityType(str, Enum):
    GENE = "gene"
    PROTEIN = "protein"
    TRANSCRIPT = "transcript"
    CDS = "cds"
    PSEUDOGENE = "pseudogene"
    PHENOTYPE = "phenotype"
    DISEASE = "disease"
    STRAIN = "strain"
    VARIATION = "variation"
    TRANSGENE = "transgene"
    RNAI = "rnai"
    ANATOMY_TERM = "anatomy_term"
    LIFE_STAGE = "life_stage"
    GO_TERM = "go_term"
    INTERACTION = "interaction"
    EXPRESSION_CLUSTER = "expression_cluster"
    EXPR_PATTERN = "expr_pattern"
    PAPER = "paper"
    PERSON = "person"
    LABORATORY = "laboratory"
    CLONE = "clone"
    SEQUENCE = "sequence"
    FEATURE = "feature"
    OPERON = "operon"
    GENE_CLASS = "gene_class"
    MOLECULE = "molecule"
    ANTIBODY = "antibody"
    CONSTRUCT = "construct"
    MOTIF = "motif"
    HOMOLOGY_GROUP = "homology_group"
    REARRANGEMENT = "rearrangement"
    TRANSPOSON = "transposon"
    TRANSPOSON_FAMILY = "transposon_family"
    PCR_OLIGO = "pcr_oligo"
    POSITION_MATRIX = "position_matrix"
    MICROARRAY_RESULTS = "microarray_results"
    STRUCTURE_DATA = "structure_data"
    ANALYSIS = "analysis"
    GENE_CLUSTER = "gene_cluster"
    EXPR_PROFILE = "expr_profile"


ENTITY_TYPES: Tuple[str, ...] = tuple(t.value for t in EntityType)

def type_name(value: Any) -> str:
    """Plain string tag for an EntityType or a raw string."""
    return value.value if isinstance(value, EntityType) else str(value)

# ------------------------------------------------------------------------------
# Widget groups (defaults/documentation only, never validated)
# ------------------------------------------------------------------------------

COMMON_WIDGETS: List[str] = ["overview", "external_links", "references"]

GENE_WIDGETS: List[str] = COMMON_WIDGETS + [
    "expression",
    "phenotype",
    "interactions",
    "homology",
    "sequences",
    "genetics",
    "ontology",
    "reagents",
    "mapping_data",
    "human_diseases",
    "history",
]

PROTEIN_WIDGETS: List[str] = COMMON_WIDGETS + ["sequences", "motif_details", "homology", "blast_details"]

PHENOTYPE_WIDGETS: List[str] = COMMON_WIDGETS + ["rnai", "variation", "transgene", "go", "anatomy"]

DEFAULT_WIDGETS: List[str] = ["overview"]
GENE_DEFAULT_WIDGETS: List[str] = ["overview", "phenotype", "expression", "ontology"]

# Candidate types for the search fallback cascade, in priority order
FALLBACK_SEARCH_TYPES: List[str] = ["gene", "protein", "variation", "strain", "phenotype"]

INTERACTION_KINDS: Tuple[str, ...] = ("physical", "genetic", "regulatory")

# ------------------------------------------------------------------------------
# Per-entity tool table: one parameterized entity fetch, driven by data
# ------------------------------------------------------------------------------

@dataclass(frozen=True)
class EntityTool:
    entity_type: str
    default_widgets: List[str]
    accepts_widgets: bool = True
    resolve_names: bool = False      # resolve gene names to WBGene IDs before fetching
    description: str = ""
    id_hint: str = "Entity identifier"
    widget_hint: str = ""


ENTITY_TOOLS: Dict[str, EntityTool] = {
    "get_gene": EntityTool(
        entity_type="gene",
        default_widgets=GENE_DEFAULT_WIDGETS,
        resolve_names=True,
        description=(
            "Get detailed information about a C. elegans gene including description, "
            "function, expression, phenotypes, and orthologs."
        ),
        id_hint="Gene identifier - WormBase ID (e.g., 'WBGene00006763') or gene name (e.g., 'daf-2', 'unc-13')",
        widget_hint=(
            "Specific widgets to fetch: overview, expression, phenotype, interactions, "
            "homology, sequences, genetics, external_links, references"
        ),
    ),
    "get_protein": EntityTool(
        entity_type="protein",
        default_widgets=DEFAULT_WIDGETS,
        description="Get detailed information about a protein including sequence, domains, motifs, and structure.",
        id_hint="Protein identifier - WormBase protein ID",
        widget_hint="Specific widgets to fetch: overview, sequences, motif_details, external_links, references",
    ),
    "get_phenotype": EntityTool(
        entity_type="phenotype",
        default_widgets=DEFAULT_WIDGETS,
        description=(
            "Get detailed information about a phenotype including associated genes, "
            "RNAi experiments, and variations."
        ),
        id_hint="Phenotype identifier - WormBase phenotype ID (e.g., 'WBPhenotype:0000643')",
        widget_hint="Specific widgets to fetch: overview, rnai, variation, transgene, references",
    ),
    "get_disease": EntityTool(
        entity_type="disease",
        default_widgets=DEFAULT_WIDGETS,
        description=(
            "Get information about human diseases with C. elegans models, including "
            "associated genes and orthologs."
        ),
        id_hint="Disease identifier - DOID or WormBase disease ID",
        widget_hint="Specific widgets to fetch: overview, genes, references",
    ),
    "get_strain": EntityTool(
        entity_type="strain",
        default_widgets=DEFAULT_WIDGETS,
        description=(
            "Get information about a C. elegans strain including genotype, available "
            "from, and associated phenotypes."
        ),
        id_hint="Strain identifier - strain name (e.g., 'N2', 'CB1370')",
        widget_hint="Specific widgets to fetch: overview, phenotypes, references",
    ),
    "get_variation": EntityTool(
        entity_type="variation",
        default_widgets=DEFAULT_WIDGETS,
        description=(
            "Get information about a genetic variation/allele including molecular "
            "details, phenotypes, and strains."
        ),
        id_hint="Variation identifier - allele name (e.g., 'e1370') or WormBase variation ID",
        widget_hint="Specific widgets to fetch: overview, molecular_details, phenotypes, references",
    ),
    "get_paper": EntityTool(
        entity_type="paper",
        default_widgets=["overview", "referenced_genes"],
        accepts_widgets=False,
        description=(
            "Get information about a scientific paper/publication including authors, "
            "abstract, and associated genes."
        ),
        id_hint="Paper identifier - WormBase paper ID (e.g., 'WBPaper00000001') or PubMed ID",
    ),
}

# ------------------------------------------------------------------------------
# Entity-type resource
# ------------------------------------------------------------------------------

ENTITY_TYPES_URI = "wormbase://entity-types"

ENTITY_DESCRIPTIONS: Dict[str, str] = {
    "gene": "Genes in C. elegans and related nematodes",
    "protein": "Protein sequences and annotations",
    "phenotype": "Observable characteristics and traits",
    "disease": "Human diseases with nematode models",
    "strain": "Laboratory strains and genetic backgrounds",
    "variation": "Genetic variants and alleles",
    "transgene": "Transgenic constructs",
    "rnai": "RNAi experiments and results",
    "anatomy_term": "Anatomical structures and cell types",
    "life_stage": "Developmental stages",
    "go_term": "Gene Ontology terms",
    "interaction": "Molecular and genetic interactions",
    "expression_cluster": "Co-expression clusters",
    "paper": "Scientific publications",
    "person": "Researchers in the field",
    "laboratory": "Research laboratories",
}

def describe_entity_type(name: Optional[str]) -> str:
    key = type_name(name)
    return ENTITY_DESCRIPTIONS.get(key) or f"{key} entities in WormBase"

def entity_types_document() -> Dict[str, Any]:
    return {
        "description": "Available WormBase entity types that can be queried",
        "types": [{"name": t, "description": describe_entity_type(t)} for t in ENTITY_TYPES],
    }
