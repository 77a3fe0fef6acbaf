"""Response bodies of the HTTP API and the mapping of errors onto them."""