'''Pure Python backend: symbol store, edge/suffix-link tables, extension engine and query layer.'''
