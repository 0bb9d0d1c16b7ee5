"""
The VIEW layer: Qt widgets and the PyVista scene that display the wall.
"""
