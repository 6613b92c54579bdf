"""Console front end for the cashbook."""
