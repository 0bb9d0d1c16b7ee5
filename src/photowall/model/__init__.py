"""
The MODEL layer contains pure data structures and the wall mathematics.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with Geometry, Tile assignment and the gallery configuration.
"""
