"""Infrastructure layer: config, logging, discovery, parallel processing."""
