# ===============================
# Bulk Import Configuration for MovieDesk
# ===============================

# Default CSV file when no path is given on the command line
MOVIE_CSV_PATH = "Data/movies.csv"

# Rows shown before the upload starts
PREVIEW_ROWS = 5

# Where rows that failed to upload are written for a retry
FAILED_ROWS_PATH = "Data/failed_movies.csv"
