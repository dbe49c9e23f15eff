"""
cryptoquant - composable market mechanisms and deterministic backtesting

Packages:
- primitives: exact Decimal helpers, Price, Amount, Time/Duration
- mechanisms: LiquidityPool, Derivative and OrderBook contracts
- strategy: snapshots, positions, actions, portfolio, strategy base
- analytics: performance metrics over value histories
- backtest: sequential replay engine and results
"""

__version__ = "0.1.0"
