"""Touch input device discovery."""
