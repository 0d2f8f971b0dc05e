"""Generative AI samples on Vertex AI: generation, images, tools and RAG."""

__version__ = "0.1.0"
