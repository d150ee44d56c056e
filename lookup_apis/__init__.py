"""Dictionary and thesaurus provider clients."""
