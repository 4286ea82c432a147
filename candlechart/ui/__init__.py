"""Qt widgets and the pyqtgraph rendering engine."""
