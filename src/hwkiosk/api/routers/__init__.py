"""Route modules mounted by :func:`hwkiosk.api.app.create_app`."""
