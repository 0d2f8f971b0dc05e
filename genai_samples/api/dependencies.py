"""FastAPI dependencies resolving services from the app's container."""

import asyncio

from fastapi import Request

from genai_samples.container import ServiceContainer
from genai_samples.llm.client import GeminiClient
from genai_samples.multimodal.describer import ImageDescriber
from genai_samples.rag.pipeline import RAGPipeline
from genai_samples.retrieval.retriever import Retriever

_container_lock = asyncio.Lock()


async def get_container(request: Request) -> ServiceContainer:
    """Return the app's service container, starting it on first use."""
    container: ServiceContainer | None = getattr(request.app.state, "container", None)
    if container is not None and container.started:
        return container

    async with _container_lock:
        container = getattr(request.app.state, "container", None)
        if container is None:
            container = ServiceContainer()
            request.app.state.container = container
        container.start()
    return container


async def get_llm_client(request: Request) -> GeminiClient:
    return (await get_container(request)).llm


async def get_describer(request: Request) -> ImageDescriber:
    return (await get_container(request)).describer


async def get_rag_pipeline(request: Request) -> RAGPipeline:
    return (await get_container(request)).rag


async def get_retriever(request: Request) -> Retriever:
    return (await get_container(request)).semantic_retriever
