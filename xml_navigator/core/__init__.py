"""Core engine: document model, summaries, tree index, query and services."""
