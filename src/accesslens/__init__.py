"""accesslens: single-pass access-log analytics with bounded memory."""
