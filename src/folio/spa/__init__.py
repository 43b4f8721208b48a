"""Single-page app runtime — locations, navigation and session storage."""
