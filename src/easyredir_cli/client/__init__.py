"""HTTP client, error model, and pagination for the EasyRedir API."""
