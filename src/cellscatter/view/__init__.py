"""
The VIEW layer: Qt widgets and the scene graph. It reads the model and the
controller's published transform, and forwards user input to the controller.
"""
