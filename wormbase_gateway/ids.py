from __future__ import annotations

import re
from typing import List, Optional, Tuple

# ----------------------------- Recognition ------------------------------------

# Tried in order; first match wins.
_ID_PATTERNS: List[re.Pattern] = [
    re.compile(r"^WB[A-Z][a-z]+\d+$"),   # WBGene00006763, WBVar00143949
    re.compile(r"^WBPhenotype:\d+$"),    # WBPhenotype:0000643
    re.compile(r"^DOID:\d+$"),           # disease ontology
    re.compile(r"^GO:\d+$"),             # gene ontology
    re.compile(r"^[A-Z]+\d+$"),          # simple alphanumeric (CB1370, CE12345)
]

_GENE_ID_RE = re.compile(r"^WBGene\d+$")

def matching_id_pattern(query: Optional[str]) -> Optional[str]:
    """Return the first ID pattern the query matches, or None."""
    if not isinstance(query, str):
        return None
    for pattern in _ID_PATTERNS:
        if pattern.match(query):
            return pattern.pattern
    return None

def looks_like_id(query: Optional[str]) -> bool:
    return matching_id_pattern(query) is not None

def is_gene_id(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(_GENE_ID_RE.match(value))

# ------------------------------ Inference -------------------------------------

# Ordered prefix table. "CE" (WormPep) must stay after the WB* prefixes.
_PREFIX_TYPES: List[Tuple[str, str]] = [
    ("WBGene", "gene"),
    ("WBProtein", "protein"),
    ("CE", "protein"),
    ("WBVar", "variation"),
    ("WBStrain", "strain"),
    ("WBPhenotype", "phenotype"),
    ("WBTransgene", "transgene"),
    ("WBRNAi", "rnai"),
    ("WBPaper", "paper"),
    ("WBPerson", "person"),
    ("DOID:", "disease"),
    ("GO:", "go_term"),
]

def infer_type_from_id(identifier: Optional[str]) -> Optional[str]:
    """Map an identifier to its entity type by prefix; None when nothing matches."""
    if not isinstance(identifier, str):
        return None
    for prefix, entity_type in _PREFIX_TYPES:
        if identifier.startswith(prefix):
            return entity_type
    return None
