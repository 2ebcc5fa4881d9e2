"""Infrastructure layer - adapters for sockets, HTTP, files and config."""
