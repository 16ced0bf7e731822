"""HTTP routers for the model and twiglet collections."""
