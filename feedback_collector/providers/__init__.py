"""Concrete backend implementations of the interfaces in feedback_collector.interfaces."""
