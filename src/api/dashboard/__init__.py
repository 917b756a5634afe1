"""Dashboard bounded context: overview statistics for administrators."""
