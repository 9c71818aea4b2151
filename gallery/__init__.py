"""Gallery API: items with images, owned by users, edited by owners or admins."""
