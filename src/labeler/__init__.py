"""LLM-based labeling for newly opened GitHub issues.

This package implements a GitHub Action step, providing:
- Action input configuration and explicit run context
- Provisioning of default, type and custom labels in the repository
- LLM-based classification of the issue into labels and a type
- Application of the accepted labels and type to the issue
"""
