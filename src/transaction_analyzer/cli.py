"""Command-line interface for the transaction analyzer."""

import sys
from pathlib import Path
import click
from typing import Optional, List
import logging

from .analyzer import TransactionAnalyzer
from .exceptions import LoadError
from .models.core import Transaction
from .parsers.factory import load_transactions
from .report import ReportBuilder, ReportItem, render_report
from .utils.config_manager import ConfigManager
from .utils.error_handler import ErrorCategory, ErrorHandler, handle_load_error
from .utils.validation import ValidationEngine


logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class TransactionAnalyzerCLI:
    """Wires configuration, loading, analysis and reporting together"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_manager = ConfigManager(config_path)
        self.config = self.config_manager.load_config()
        self.error_handler = ErrorHandler(self.config.log_directory)
        self.validation_engine = ValidationEngine(self.config)

    def load(self, input_file: Optional[str] = None) -> List[Transaction]:
        """Load transactions, recording the failure before re-raising it"""
        path = input_file or self.config.input_file
        try:
            transactions = load_transactions(path, self.config)
        except LoadError as e:
            handle_load_error(self.error_handler, e)
            raise
        self.error_handler.log_info(f"Loaded {len(transactions)} transactions from {path}")
        return transactions

    def build_analyzer(self, input_file: Optional[str] = None) -> TransactionAnalyzer:
        return TransactionAnalyzer(self.load(input_file), self.config)

    def run_report(self, input_file: Optional[str] = None) -> List[ReportItem]:
        """Load the file and run every query once"""
        analyzer = self.build_analyzer(input_file)
        return ReportBuilder(analyzer, self.config.report, self.error_handler).build()

    def validate(self, input_file: Optional[str] = None) -> List[str]:
        """Return problems that would make date or amount queries fail"""
        transactions = self.load(input_file)
        problems = self.validation_engine.validate_transactions(transactions)
        for problem in problems:
            self.error_handler.log_warning(problem, "INVALID_RECORD", ErrorCategory.DATA_VALIDATION,
                                           file_path=input_file)

        for transaction_id in self.validation_engine.find_duplicate_ids(transactions):
            self.error_handler.log_warning(
                f"Duplicate transaction id: {transaction_id}",
                "DUPLICATE_TRANSACTION",
                ErrorCategory.DATA_VALIDATION,
                file_path=input_file
            )
        return problems

    def generate_config_template(self, output_path: str) -> bool:
        """Generate configuration template file"""
        try:
            self.config_manager.save_config_template(output_path)
            return True
        except OSError as e:
            self.error_handler.log_error(
                f"Failed to generate config template: {str(e)}",
                "CONFIG_TEMPLATE_ERROR",
                ErrorCategory.CONFIGURATION,
                file_path=output_path,
                exception=e
            )
            return False


# CLI Commands using Click
@click.group()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Transaction Analyzer - answer queries over a file of transaction records"""

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj['cli'] = TransactionAnalyzerCLI(config)


@cli.command()
@click.argument('input_file', required=False)
@click.pass_context
def report(ctx, input_file):
    """Run every query and print the results"""

    cli_instance = ctx.obj['cli']

    try:
        items = cli_instance.run_report(input_file)
    except LoadError as e:
        click.echo(f"✗ Error loading transactions: {str(e)}")
        sys.exit(1)

    click.echo(render_report(items))

    failed = [item for item in items if not item.success]
    if failed:
        click.echo(f"\n⚠ {len(failed)} queries failed. Check logs for details.")


@cli.command()
@click.argument('input_file')
@click.pass_context
def validate(ctx, input_file):
    """Check that every record has a usable id, date and amount"""

    cli_instance = ctx.obj['cli']

    try:
        problems = cli_instance.validate(input_file)
    except LoadError as e:
        click.echo(f"✗ Error loading transactions: {str(e)}")
        sys.exit(1)

    if problems:
        click.echo(f"✗ Found {len(problems)} problems:")
        for problem in problems:
            click.echo(f"  {problem}")
        sys.exit(1)

    click.echo("✓ All records are valid")


@cli.command()
@click.argument('input_file')
@click.argument('transaction_id')
@click.pass_context
def show(ctx, input_file, transaction_id):
    """Print the transaction with the given id"""

    cli_instance = ctx.obj['cli']

    try:
        analyzer = cli_instance.build_analyzer(input_file)
    except LoadError as e:
        click.echo(f"✗ Error loading transactions: {str(e)}")
        sys.exit(1)

    transaction = analyzer.find_transaction_by_id(transaction_id)
    if transaction is None:
        click.echo(f"✗ Transaction {transaction_id} not found")
        sys.exit(1)

    click.echo(transaction.to_json())


@cli.command()
@click.argument('output_path', default='analyzer_config.json')
@click.option('--format', type=click.Choice(['json', 'yaml']), default='json', help='Configuration file format')
@click.pass_context
def init_config(ctx, output_path, format):
    """Generate configuration template file"""

    cli_instance = ctx.obj['cli']

    # Adjust extension based on format
    path = Path(output_path)
    if format == 'yaml' and path.suffix not in ('.yml', '.yaml'):
        output_path = str(path.with_suffix('.yml') if path.suffix == '.json' else path.with_name(path.name + '.yml'))
    elif format == 'json' and path.suffix != '.json':
        output_path = str(path.with_suffix('.json') if path.suffix in ('.yml', '.yaml') else path.with_name(path.name + '.json'))

    if cli_instance.generate_config_template(output_path):
        click.echo(f"✓ Configuration template created: {output_path}")
    else:
        click.echo("✗ Failed to create configuration template")
        sys.exit(1)


if __name__ == '__main__':
    cli()
