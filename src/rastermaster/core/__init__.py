"""Parameter model and toolpath calculation."""
