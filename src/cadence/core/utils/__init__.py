"""Small helpers shared by the store, tracker and CLI."""
