"""Application logging (labeled stdout lines) and the JSON Lines error log."""
