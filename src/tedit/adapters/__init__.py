"""Front ends that drive an ``Editor`` session."""
