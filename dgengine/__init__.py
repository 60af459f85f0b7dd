"""Engine core: input codes, messages and a message bus, render state keys, render command queueing and a render thread."""

__version__ = "0.1.0"