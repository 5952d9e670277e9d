"""Example usage of the apibump comparison engine."""

import json
from apibump import (
    ApiBumpEngine,
    EngineConfig,
    classify,
    load_symbol_table,
    snapshot_from_dict,
    snapshot_to_dict,
)

# Resolver dump of the new version, as a front-end would emit it
symbols = {
    "module": "example.com/billing",
    "symbols": [
        {
            "name": "NewInvoice",
            "kind": "func",
            "signature": {
                "params": ["customer string", "lines []billing.Line"],
                "results": ["*billing.Invoice", "error"],
            },
        },
        {
            "name": "Invoice",
            "kind": "type",
            "type": "example.com/billing.Invoice",
            "underlying": {
                "shape": "struct",
                "fields": [
                    {"name": "ID", "type": "string"},
                    {"name": "Total", "type": "float64"},
                    {"name": "Currency", "type": "string"},
                    {"name": "cache", "type": "map[string]string"},
                ],
                "methods": [
                    {
                        "name": "Pay",
                        "signature": {
                            "params": ["ctx context.Context"],
                            "results": ["error"],
                            "receiver": "*example.com/billing.Invoice",
                        },
                    },
                ],
            },
        },
        {"name": "MaxLines", "kind": "const", "type": "untyped int"},
        {"name": "DefaultCurrency", "kind": "var", "type": "string"},
        {"name": "fmt", "kind": "pkgname"},
    ],
}

# Snapshot of the released version
old = {
    "items": {
        "NewInvoice": {
            "kind": "Func",
            "function": {
                "argTypes": ["string", "[]billing.Line"],
                "resTypes": ["*billing.Invoice", "error"],
            },
        },
        "Invoice": {
            "kind": "Struct",
            "type": "example.com/billing.Invoice",
            "composite": {
                "fields": {
                    "ID": {"kind": "Var", "type": "string"},
                    "Total": {"kind": "Var", "type": "float64"},
                },
                "methods": {
                    "Pay": {
                        "kind": "Func",
                        "function": {
                            "argTypes": ["context.Context"],
                            "resTypes": ["error"],
                            "receiver": "*example.com/billing.Invoice",
                        },
                    },
                },
            },
        },
        "MaxLines": {"kind": "Const", "type": "untyped int"},
        "DefaultCurrency": {"kind": "Var", "type": "string"},
    }
}


def main():
    # Classify the new symbols into a snapshot
    result = classify(load_symbol_table(symbols))
    print("New snapshot:")
    print(json.dumps(snapshot_to_dict(result.snapshot), indent=2))

    # Create engine with tracing enabled
    config = EngineConfig(trace_rule_application=True)
    engine = ApiBumpEngine(config)

    report = engine.compare(snapshot_from_dict(old), result.snapshot, result.warnings)

    print("\nComparison Result:")
    print(json.dumps(report.to_dict(), indent=2))

    # Adding the Currency field is a backward-compatible change
    print(f"\nRequired bump: {report.bump.value}")


if __name__ == "__main__":
    main()
