"""Application errors and the session and guest services."""