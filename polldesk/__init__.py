"""PollDesk: declarative polling schema and the engine that serves it."""
