"""
Stock report
Prints the inventory valuation as a table (flask stock-report)
"""

import click
from tabulate import tabulate

from backoffice.services.inventory import InventoryReportService

COLUMNS = ['product_code', 'name', 'quantity', 'price', 'total_value']


def format_stock_report(report, tablefmt="grid"):
    """Render an inventory report dict as text: one row per product plus totals."""
    rows = [[row[column] for column in COLUMNS] for row in report['products']]
    table = tabulate(rows, headers=COLUMNS, tablefmt=tablefmt, floatfmt=".2f")
    summary = report['summary']
    return (
        f"{table}\n"
        f"Products: {summary['total_products']}  "
        f"Total inventory value: {summary['total_inventory_value']:.2f}"
    )


def register_cli(app):
    @app.cli.command('stock-report')
    @click.option('--format', 'tablefmt', default='grid', help='tabulate table format')
    def stock_report(tablefmt):
        """Print every product with its stock value."""
        click.echo(format_stock_report(InventoryReportService.get_report(), tablefmt))
