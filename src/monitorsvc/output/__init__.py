"""CLI output: Rich rendering and JSON formatting of ServiceResult."""
