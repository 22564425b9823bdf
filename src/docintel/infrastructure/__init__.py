"""Infrastructure adapters: HTTP transport, analysis client, tools, config."""
