"""
Ask API Routes

FastAPI routes for answering philosophical questions from retrieved papers.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from philsearch.core.config import Settings
from philsearch.core.dependencies import get_settings, get_sources
from philsearch.core.logging import get_logger
from philsearch.schemas.ask import AnswerResponse, AskRequest, SourceCitation
from philsearch.schemas.papers import SearchResult
from philsearch.schemas.subfields import SubfieldDetection
from philsearch.services.classification import detect_subfield
from philsearch.services.retrieval import search_multi_source
from philsearch.services.sources import BaseSource
from philsearch.services.synthesis import synthesize_answer
from philsearch.tools.text_processing import sanitize_question

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["ask"])


@router.post("/ask", response_model=AnswerResponse)
async def ask_question(
    request: AskRequest,
    sources: List[BaseSource] = Depends(get_sources),
    config: Settings = Depends(get_settings),
):
    """
    Answer a philosophical question.
    Retrieves papers from all enabled sources, then synthesizes an answer.
    """
    question = sanitize_question(request.question)

    try:
        result = await search_multi_source(
            question,
            request.limit or config.default_result_limit,
            sources=sources,
            threshold=config.duplicate_title_threshold,
        )
        synthesis = await synthesize_answer(question, result.papers)
    except Exception as e:
        logger.error(f"Error processing question: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return AnswerResponse(
        question=question,
        answer=synthesis.answer,
        sources=[
            SourceCitation(title=p.title, authors=p.authors, url=p.url, year=p.year)
            for p in result.papers
        ],
        subfield=result.detected_subfield,
        total_candidates=result.total,
        model=synthesis.model,
    )


@router.post("/search", response_model=SearchResult)
async def search_papers(
    request: AskRequest,
    sources: List[BaseSource] = Depends(get_sources),
    config: Settings = Depends(get_settings),
):
    """
    Retrieval only: the merged, deduplicated papers for a question.
    """
    question = sanitize_question(request.question)

    try:
        return await search_multi_source(
            question,
            request.limit or config.default_result_limit,
            sources=sources,
            threshold=config.duplicate_title_threshold,
        )
    except Exception as e:
        logger.error(f"Error searching papers: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/subfields/detect", response_model=SubfieldDetection)
async def detect_question_subfield(q: str = Query(..., max_length=500, description="Question text")):
    """
    Show which philosophy subfield a question would be classified as.
    """
    return detect_subfield(q)
