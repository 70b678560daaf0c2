"""Points d'entree en ligne de commande."""
