"""Year-scoped payroll configuration backed by YAML files."""
