"""Scene math, camera/entity update loop and OBJ mesh loading."""
