"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or the Visualization (pyqtgraph).
It deals with survey points, cell editing state and I/O.
"""
