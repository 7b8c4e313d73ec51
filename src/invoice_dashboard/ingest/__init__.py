"""Record sources: the invoice CSV file and the JSON invoices endpoint."""
