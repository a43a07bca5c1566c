"""
Answer synthesis.

Turns the merged paper list into LLM context and asks the model for
an answer. With zero papers the model is told to answer from general
knowledge. Any LLM failure degrades to a fixed fallback answer.
"""
from typing import NamedTuple, Sequence

from langchain_core.messages import HumanMessage, SystemMessage

from philsearch.core.config import settings
from philsearch.core.exceptions import LLMError
from philsearch.core.logging import get_logger
from philsearch.schemas.papers import PaperRecord
from philsearch.services.llm import get_llm

logger = get_logger(__name__)

ABSTRACT_PREVIEW_CHARS = 200
FALLBACK_MODEL = "fallback"

NO_PAPERS_CONTEXT = (
    "No specific papers found. Provide a general philosophical response based on your knowledge."
)

SYSTEM_PROMPT = (
    "You answer philosophical questions clearly and rigorously. "
    "Draw on the papers provided as context, cite their concepts and authors where relevant, "
    "and keep the answer to 2-4 paragraphs."
)


class SynthesisResult(NamedTuple):
    answer: str
    model: str


def build_context(papers: Sequence[PaperRecord]) -> str:
    """Numbered paper list with year and a short abstract preview."""
    if not papers:
        return NO_PAPERS_CONTEXT

    entries = []
    for index, paper in enumerate(papers, 1):
        entry = f'{index}. "{paper.title}" by {paper.authors}'
        if paper.year:
            entry += f" ({paper.year})"
        if paper.abstract:
            abstract = paper.abstract
            if len(abstract) > ABSTRACT_PREVIEW_CHARS:
                abstract = abstract[:ABSTRACT_PREVIEW_CHARS] + "..."
            entry += f"\n   Abstract: {abstract}"
        entries.append(entry)

    return "\n\n".join(entries)


def fallback_answer(question: str) -> str:
    return (
        f'Your question: "{question}"\n\n'
        "The answer service is temporarily unavailable. "
        "Please try again in a moment."
    )


async def synthesize_answer(question: str, papers: Sequence[PaperRecord]) -> SynthesisResult:
    """
    Generate an answer grounded on the retrieved papers.

    Returns the fallback answer (model "fallback") when no API key is
    configured, the model call fails, or the model returns nothing.
    """
    user_prompt = (
        "Based on the following philosophical papers, answer this question:\n\n"
        f"Question: {question}\n\n"
        f"Relevant Philosophical Papers:\n{build_context(papers)}\n\n"
        "Provide a thoughtful, well-reasoned answer that synthesizes insights from these sources."
    )

    try:
        llm = get_llm(model=settings.LLM_MODEL)
        response = await llm.ainvoke([
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=user_prompt),
        ])
        answer = (response.content or "").strip() if isinstance(response.content, str) else ""
        if not answer:
            raise LLMError("empty response")
    except LLMError as e:
        logger.warning(f"Synthesis unavailable: {e}")
        return SynthesisResult(fallback_answer(question), FALLBACK_MODEL)
    except Exception as e:
        logger.error(f"LLM error: {e}")
        return SynthesisResult(fallback_answer(question), FALLBACK_MODEL)

    return SynthesisResult(answer, settings.LLM_MODEL)
