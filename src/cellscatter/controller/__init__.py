"""
The CONTROLLER layer owns the view transform and turns input gestures into
new transforms. It never touches scene items directly; views subscribe to its
signals.
"""
