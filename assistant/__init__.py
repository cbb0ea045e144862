"""Chat assistant app: tools, system prompt, CLI shell and memory seeding."""
