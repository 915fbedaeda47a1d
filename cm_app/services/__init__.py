"""Application services: settings, record store, archives and the camera catalog."""
