"""Infrastructure layer: filesystem discovery, graph engine, task runner.

This layer depends on the domain layer and third-party libs (NetworkX).
It must never import from services, commands, or output.
"""
