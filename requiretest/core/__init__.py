"""Cross-cutting helpers shared by the engine and the CLI."""
