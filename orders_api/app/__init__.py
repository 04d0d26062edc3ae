"""Application package: pricing engine, HTTP routes and services."""
