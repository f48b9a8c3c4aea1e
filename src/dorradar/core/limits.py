"""Fixed limits shared by the engine and its configuration."""

# Upper bound, in seconds, on one call to the metrics store, whatever the window.
MAX_TIMEOUT = 20.0
