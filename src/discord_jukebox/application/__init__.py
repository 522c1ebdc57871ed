"""
Application Layer

Contains use cases, command/query handlers, and application services.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- commands/: write operations (PlayCommand, SkipCommand, etc.) and the dispatcher
- queries/: read operations (ShowQueueQuery)
- services/: the playback driver and residency monitor
- interfaces/: Port interfaces for infrastructure adapters
"""
