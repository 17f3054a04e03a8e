"""Qt front end: figure renderers, visual handles and the main window."""
