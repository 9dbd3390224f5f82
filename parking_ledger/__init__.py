# Parking Ledger — vehicle entry/exit tracking and fee calculation service
