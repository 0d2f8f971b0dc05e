#!/usr/bin/env python
"""Run every generative AI sample once, in order.

Usage:
    python -m scripts.run_samples

Requires VERTEX_PROJECT (or VERTEX_API_KEY) in the environment. The vector
store sample also needs a reachable Qdrant at QDRANT_URL.
"""

import asyncio
import sys

from genai_samples.config import get_settings
from genai_samples.container import ServiceContainer
from genai_samples.exceptions import GenAISamplesError
from genai_samples.logging_config import get_logger, setup_logging
from genai_samples.multimodal.loader import ImageSource

logger = get_logger(__name__)

TEXT_PROMPT = "서울에 대해 알려줘"

WHALE_PROMPT = (
    "A landscape-style painting depicting a giant whale soaring freely through a "
    "celestial blue cosmos. The whale is rendered with delicate brushstrokes, evoking "
    "a cloud-like ethereal quality. The deep azure cosmic expanse is sprinkled with "
    "subtle starlight, creating an enigmatic atmosphere. The whale's body glows with "
    "a faint cerulean hue, contrasting vividly against the rich navy and violet tones "
    "of the spatial background. Its tail and fins, adorned with soft curvilinear "
    "forms, convey dynamic motion, while distant shimmering planets enhance the "
    "boundless mystery of the universe. The harmonious blend of the whale and cosmic "
    "elements creates a dreamlike, visually stunning composition that embodies "
    "otherworldly beauty"
)

PALACE_PROMPT = "따뜻한 봄날, 경복궁을 거닐고 있는 한복을 입은 아이돌"

IMAGE_URI = "https://metanonia.com/images/background.jpeg"
IMAGE_INSTRUCTION = "describe this image using Korean."

WEATHER_PROMPT = "Get weather details in New Delhi and San Francisco?"

RAG_DOCUMENTS = {
    "doc1": "Vertex AI is Google Cloud's ML platform",
    "doc2": "RAG is an AI approach combining retrieval and generation",
}
RAG_QUESTION = "How do I implement RAG with Vertex AI?"


def _section(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


async def run_text_sample(services: ServiceContainer) -> None:
    _section("TEXT GENERATION")
    result = await services.llm.generate_text(TEXT_PROMPT)
    print(result.content)


async def run_image_samples(services: ServiceContainer) -> None:
    _section("IMAGE GENERATION")
    images = await services.images.generate_images(WHALE_PROMPT)
    for image in images:
        print(f"image {image.index}: {image.mime_type}, {image.size} bytes")

    images = await services.images.generate_images(
        PALACE_PROMPT,
        language="ko",
        enhance_prompt=True,
    )
    for image in images:
        print(f"image {image.index}: {image.mime_type}, {image.size} bytes")
        if image.enhanced_prompt:
            print(f"  enhanced prompt: {image.enhanced_prompt}")


async def run_describe_sample(services: ServiceContainer) -> None:
    _section("IMAGE DESCRIPTION")
    result = await services.describer.describe(
        ImageSource(uri=IMAGE_URI),
        instruction=IMAGE_INSTRUCTION,
    )
    print(result.content)


async def run_function_calling_sample(services: ServiceContainer) -> None:
    _section("PARALLEL FUNCTION CALLING")
    result = await services.agent.run(WEATHER_PROMPT)
    for call in result.calls:
        print(f"{call.name}({call.args}) -> {call.response}")
    print(result.answer)


async def run_rag_samples(services: ServiceContainer) -> None:
    _section("RAG (IN MEMORY)")
    await services.in_memory_retriever.index(RAG_DOCUMENTS)
    response = await services.in_memory_rag.query_simple(RAG_QUESTION)
    print(response)

    _section("RAG (VECTOR STORE)")
    await services.semantic_retriever.index(RAG_DOCUMENTS)
    response = await services.rag.query_simple(RAG_QUESTION)
    print(response)


async def run_samples() -> bool:
    """Run all samples, stopping at the first failure.

    Returns:
        True if every sample completed.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level)

    try:
        async with ServiceContainer(settings) as services:
            await run_text_sample(services)
            await run_image_samples(services)
            await run_describe_sample(services)
            await run_function_calling_sample(services)
            await run_rag_samples(services)
    except GenAISamplesError as e:
        logger.error(
            f"Sample failed: {e.message}",
            extra={"error_code": e.code.value, "details": e.details},
        )
        return False

    return True


def main() -> None:
    """Main entry point."""
    passed = asyncio.run(run_samples())
    sys.exit(0 if passed else 1)


if __name__ == "__main__":
    main()
