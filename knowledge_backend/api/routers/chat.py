"""
Chat API endpoint.

Routes: POST /api/chat

Dependencies: knowledge_backend.application.services.chat_service
System role: Grounded Q&A HTTP API
"""

from fastapi import APIRouter, Depends

from knowledge_backend.api.deps import get_chat_service
from knowledge_backend.api.error_handling import handle_chat_errors
from knowledge_backend.application.services import ChatService
from knowledge_backend.models.chat import ChatRequest, ChatResponse, RetrievedFragment

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
@handle_chat_errors
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a question from the knowledge base.

    Raises:
        HTTPException(400): Missing message
        HTTPException(429): Upstream rate limit
        HTTPException(500): Missing credential, embedding or generation failure
        HTTPException(503): Vector store unavailable
    """
    answer = await chat_service.answer(request.message)
    return ChatResponse(
        message="Chat response generated successfully!",
        response=answer.text,
        sources=[RetrievedFragment.from_search_result(r) for r in answer.sources],
    )
