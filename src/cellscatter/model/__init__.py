"""
The MODEL layer contains pure data structures and the coordinate math.
It has NO knowledge of the GUI (Qt) scene graph.
It deals with the dataset, the plot domain, view transforms and sizing.
"""
