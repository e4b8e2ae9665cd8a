"""Layout algorithms over fragment positions."""
