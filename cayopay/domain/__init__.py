"""Domain types: money, identifiers, addresses, roles and entity records."""