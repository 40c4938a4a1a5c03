import importlib


def test_circular_dependencies():
    """Test if modules can be imported without circular dependencies"""
    # List of all modules to test in dependency order
    modules = [
        # Independent modules (no internal deps)
        'sqlfield.types',
        'sqlfield.exceptions',
        'sqlfield.options',
        'sqlfield.cache',

        # Field representation and results
        'sqlfield.ok',
        'sqlfield.field',
        'sqlfield.diagnostics',

        # Converters
        'sqlfield.adapters.registry',
        'sqlfield.adapters.builtin',
        'sqlfield.adapters',

        # Main package
        'sqlfield',
    ]

    results = {}
    for module in modules:
        try:
            importlib.import_module(module)
            results[module] = True
        except Exception as e:
            print(f'{module} failed: {e}')
            results[module] = False

    failed = [m for m, ok in results.items() if not ok]
    assert not failed, f'Failed to import: {failed}'
