"""cpaudit — relationship and rule-base audit for firewall policy exports."""

__version__ = "0.1.0"
