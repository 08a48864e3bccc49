"""Public API namespaces exposed on ArchiveFS."""
