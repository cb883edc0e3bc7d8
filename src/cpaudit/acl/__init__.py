"""Access-control rules — decoding and classification against an associated set."""
