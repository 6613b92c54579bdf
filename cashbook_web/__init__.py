"""Flask front end for the cashbook."""
