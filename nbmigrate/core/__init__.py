"""nbmigrate core: parsing, configuration and the migration engine."""
