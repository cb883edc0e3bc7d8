"""Policy objects — the catalog of exported entities and the graph between them."""
