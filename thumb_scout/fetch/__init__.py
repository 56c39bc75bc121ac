"""Asynchronous fetch → parse → extract pipelines."""
