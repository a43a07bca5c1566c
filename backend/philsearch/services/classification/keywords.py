"""
Philosophy subfield keyword tables.

SUBFIELD_KEYWORDS drives classification. SUBFIELD_SEARCH_TERMS is a
separate, shorter table of terms appended to academic API queries once
a subfield has been detected. Both are built once at import time and
exposed read-only.
"""
from types import MappingProxyType
from typing import List, Mapping, NamedTuple, Optional, Tuple

from philsearch.schemas.subfields import Subfield


class SubfieldKeywords(NamedTuple):
    """Keywords for one subfield and the weight applied to its match count."""
    keywords: Tuple[str, ...]
    weight: float = 1.0


SUBFIELD_KEYWORDS: Mapping[Subfield, SubfieldKeywords] = MappingProxyType({
    Subfield.EPISTEMOLOGY: SubfieldKeywords((
        "knowledge", "truth", "belief", "justification", "skepticism",
        "certainty", "evidence", "epistemic", "cognition", "understanding",
        "rationalism", "empiricism", "perception", "testimony", "memory",
    )),
    Subfield.METAPHYSICS: SubfieldKeywords((
        "existence", "reality", "being", "causation", "time", "space",
        "identity", "essence", "substance", "property", "possible world",
        "necessity", "contingency", "ontology", "persistence", "change",
    )),
    Subfield.ETHICS: SubfieldKeywords((
        "right", "wrong", "ought", "good", "evil", "virtue", "duty", "moral",
        "ethical", "justice", "fairness", "obligation", "consequentialism",
        "deontology", "utilitarianism", "character",
    )),
    Subfield.PHILOSOPHY_OF_MIND: SubfieldKeywords((
        "consciousness", "mind", "mental", "thought", "perception", "qualia",
        "intentionality", "self", "awareness", "experience", "cognition",
        "brain", "dualism", "materialism", "functionalism",
    )),
    Subfield.POLITICAL_PHILOSOPHY: SubfieldKeywords((
        "justice", "rights", "state", "government", "liberty", "freedom",
        "authority", "democracy", "power", "equality", "legitimacy",
        "social contract", "sovereignty", "citizenship", "law",
    )),
    Subfield.AESTHETICS: SubfieldKeywords((
        "beauty", "art", "taste", "aesthetic", "sublime", "ugly", "artistic",
        "creative", "expression", "representation", "interpretation",
        "criticism", "style", "form", "content",
    )),
    Subfield.LOGIC: SubfieldKeywords((
        "argument", "reasoning", "validity", "proof", "inference", "premise",
        "conclusion", "fallacy", "deduction", "induction", "soundness",
        "consistency", "contradiction", "formal", "modal",
    )),
    Subfield.PHILOSOPHY_OF_SCIENCE: SubfieldKeywords((
        "science", "theory", "explanation", "law", "hypothesis", "experiment",
        "observation", "scientific method", "paradigm", "confirmation",
        "falsification", "realism", "instrumentalism",
    )),
    Subfield.EXISTENTIALISM: SubfieldKeywords((
        "meaning", "freedom", "existence", "absurd", "authenticity", "anxiety",
        "choice", "responsibility", "being-in-the-world", "nothingness",
        "death", "facticity", "transcendence",
    )),
})


SUBFIELD_SEARCH_TERMS: Mapping[Subfield, Tuple[str, ...]] = MappingProxyType({
    Subfield.EPISTEMOLOGY: ("epistemology", "knowledge", "justification"),
    Subfield.METAPHYSICS: ("metaphysics", "ontology", "existence"),
    Subfield.ETHICS: ("ethics", "moral", "normative"),
    Subfield.PHILOSOPHY_OF_MIND: ("philosophy of mind", "consciousness", "mental"),
    Subfield.POLITICAL_PHILOSOPHY: ("political philosophy", "justice", "rights"),
    Subfield.AESTHETICS: ("aesthetics", "art", "beauty"),
    Subfield.LOGIC: ("logic", "reasoning", "argument"),
    Subfield.PHILOSOPHY_OF_SCIENCE: ("philosophy of science", "scientific method"),
    Subfield.EXISTENTIALISM: ("existentialism", "meaning", "freedom"),
})


def get_subfield_search_terms(subfield: Optional[Subfield]) -> List[str]:
    """Search terms to append to API queries for a detected subfield."""
    if subfield is None:
        return []
    return list(SUBFIELD_SEARCH_TERMS.get(subfield, ()))
