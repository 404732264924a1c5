"""fluentbox test suite."""
