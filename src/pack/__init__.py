"""Pack resources backend: resources, attachments and their HTTP API."""
