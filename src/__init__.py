"""Shop Insights: filtering and derived statistics for shop list views."""
