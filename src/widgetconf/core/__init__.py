"""Core parsing, entity and binding logic for widgetconf."""
