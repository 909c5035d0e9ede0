"""Cross-service building blocks: errors, ports, policies and the service base."""
