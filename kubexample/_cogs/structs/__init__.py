"""
Plain data structures passed between the layers: credentials, raw bodies,
resource references, and the rows for display.

No external calls or any i/o activities are done here.
"""
