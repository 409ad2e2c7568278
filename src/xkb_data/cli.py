#!/usr/bin/env python3
"""
XKB Keyboard Layout CLI Tool
Print the keyboard layouts and variants described by the XKB rules files.
"""

import argparse
import fnmatch
import json
import sys
import logging
from typing import Any, Dict, List, Optional, Sequence

import yaml
from ruamel.yaml.error import YAMLError

from .config import XkbDataConfig, get_config_template, get_rule_set_info, list_rule_sets, load_config
from .config.schema import OUTPUT_FORMATS, RULE_SET_CHOICES
from .exceptions import MalformedRulesError, RulesAccessError
from .loader import all_keyboard_layouts, get_keyboard_layouts, load_rule_set, merge_rules
from .models import KeyboardLayout, KeyboardLayouts


# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class XkbDataCLI:
    """CLI for browsing XKB keyboard layouts."""

    def __init__(
        self,
        config: XkbDataConfig,
        args: Optional[argparse.Namespace] = None,
        rules_paths: Optional[Dict[str, str]] = None
    ):
        self.config = config
        self.args = args
        # Paths given on the command line, keyed by rule set name
        self.rules_paths = {name: path for name, path in (rules_paths or {}).items() if path}

    @property
    def verbose(self) -> bool:
        return bool(self.args and self.args.verbose)

    @property
    def quiet(self) -> bool:
        return bool(self.args and self.args.quiet)

    def load_layouts(self) -> KeyboardLayouts:
        """Load the configured rule set.

        Path precedence per rule set: --base-rules/--extra-rules, then the
        X11_*_RULES_XML variables, then the config file, then the system file.

        Raises:
            RulesAccessError: If a rules file cannot be read
            MalformedRulesError: If a rules file is not a valid registry
        """
        rule_set = self.config.rule_set
        if rule_set != 'all':
            return self._load_rule_set(rule_set)

        if not self._has_path_overrides():
            return all_keyboard_layouts()

        return merge_rules(*[self._load_rule_set(name) for name in list_rule_sets()])

    def _load_rule_set(self, name: str) -> KeyboardLayouts:
        if name in self.rules_paths:
            return get_keyboard_layouts(self.rules_paths[name])
        return load_rule_set(name, default_path=self._configured_path(name))

    def _configured_path(self, name: str) -> Optional[str]:
        return getattr(self.config, get_rule_set_info(name)['config_key'])

    def _has_path_overrides(self) -> bool:
        return any(
            name in self.rules_paths or self._configured_path(name)
            for name in list_rule_sets()
        )

    def list_layouts(
        self,
        match: Optional[str] = None,
        show_variants: bool = True,
        output_file: Optional[str] = None
    ) -> int:
        """List keyboard layouts, optionally filtered by a glob on the layout name."""
        catalog = self._load_or_report()
        if catalog is None:
            return 1

        if match:
            layouts = catalog.layouts_mut()
            layouts[:] = [layout for layout in layouts if fnmatch.fnmatchcase(layout.name(), match)]
            if self.verbose:
                print(f"{len(layouts)} layouts match '{match}'", file=sys.stderr)

        logger.info(f"Printing {len(catalog.layouts())} layouts as {self.config.output_format}")
        output_data = self._format(catalog.layouts(), show_variants, heading="Keyboard layouts")
        return self._write(output_data, output_file)

    def show_layout(self, name: str) -> int:
        """Show a single layout and its variants."""
        catalog = self._load_or_report()
        if catalog is None:
            return 1

        matches = [layout for layout in catalog.layouts() if layout.name() == name]
        if not matches:
            print(f"Error: Layout '{name}' not found", file=sys.stderr)
            return 1

        return self._write(self._format(matches, show_variants=True))

    def config_template(self) -> int:
        """Print a starter configuration file."""
        print(yaml.safe_dump(get_config_template(), default_flow_style=False, sort_keys=False), end='')
        return 0

    def _load_or_report(self) -> Optional[KeyboardLayouts]:
        if self.verbose:
            print(f"Loading {self.config.rule_set} rules...", file=sys.stderr)
        try:
            return self.load_layouts()
        except RulesAccessError as e:
            print(f"Error: Cannot access rules file: {e}", file=sys.stderr)
        except MalformedRulesError as e:
            print(f"Error: Invalid rules file: {e}", file=sys.stderr)
        return None

    def _format(
        self,
        layouts: Sequence[KeyboardLayout],
        show_variants: bool,
        heading: Optional[str] = None
    ) -> str:
        output_format = self.config.output_format

        if output_format == 'text':
            return self._format_text(layouts, show_variants, heading)
        if output_format == 'table':
            return self._format_table(layouts, show_variants)

        data = self._to_data(layouts, show_variants)
        if output_format == 'json':
            return json.dumps(data, indent=2, ensure_ascii=False)
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _to_data(self, layouts: Sequence[KeyboardLayout], show_variants: bool) -> Dict[str, Any]:
        items = []
        for layout in layouts:
            item = layout.to_dict()
            if not show_variants:
                del item['variants']
            items.append(item)
        return {'layouts': items}

    def _format_text(
        self,
        layouts: Sequence[KeyboardLayout],
        show_variants: bool,
        heading: Optional[str]
    ) -> str:
        lines = []
        if heading:
            lines.append(heading)

        for layout in layouts:
            lines.append(f"  {layout.name()}: {layout.description()}")
            variants = layout.variants()
            if show_variants and variants is not None:
                for variant in variants:
                    lines.append(f"    {variant.name()}: {variant.description()}")

        return "\n".join(lines)

    def _format_table(self, layouts: Sequence[KeyboardLayout], show_variants: bool) -> str:
        """Format layouts as a table."""
        lines = []
        lines.append(f"{'Layout':<12} {'Variant':<24} {'Description'}")
        lines.append("-" * 70)

        for layout in layouts:
            lines.append(f"{layout.name():<12} {'':<24} {layout.description()}")
            variants = layout.variants()
            if show_variants and variants is not None:
                for variant in variants:
                    lines.append(f"{layout.name():<12} {variant.name():<24} {variant.description()}")

        return "\n".join(lines)

    def _write(self, output_data: str, output_file: Optional[str] = None) -> int:
        if output_file:
            try:
                with open(output_file, 'w', encoding='utf-8') as f:
                    f.write(output_data)
                    f.write("\n")
            except OSError as e:
                logger.error(f"Failed to write {output_file}: {e}")
                print(f"Error: Cannot write output file: {e}", file=sys.stderr)
                return 1
            if not self.quiet:
                print(f"Output saved to: {output_file}", file=sys.stderr)
        else:
            print(output_data)
        return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="xkb-data",
        description="XKB keyboard layout browser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list                               # Base and extra layouts with variants
  %(prog)s list --rules base --no-variants    # Base layouts only
  %(prog)s list --match 'g*' --format json    # Layouts starting with 'g' as JSON
  %(prog)s show de                            # One layout and its variants
  %(prog)s config-template > xkb-data.yaml    # Starter configuration file
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file path')
    parser.add_argument('--base-rules', help='Base rules XML (overrides X11_BASE_RULES_XML and the config file)')
    parser.add_argument('--extra-rules', help='Extra rules XML (overrides X11_EXTRA_RULES_XML and the config file)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('-q', '--quiet', action='store_true', help='Quiet mode')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # List command
    list_parser = subparsers.add_parser('list', help='List keyboard layouts')
    list_parser.add_argument('--rules', choices=RULE_SET_CHOICES,
                             help='Rule sets to load (default: all)')
    list_parser.add_argument('--match', help='Only layouts whose name matches this glob')
    list_parser.add_argument('--no-variants', action='store_true', help='Do not print variants')
    list_parser.add_argument('--format', choices=OUTPUT_FORMATS,
                             help='Output format (default: text)')
    list_parser.add_argument('--output-file', help='Save output to file')

    # Show command
    show_parser = subparsers.add_parser('show', help='Show one layout and its variants')
    show_parser.add_argument('layout', help='Layout name (e.g., us, de)')
    show_parser.add_argument('--rules', choices=RULE_SET_CHOICES,
                             help='Rule sets to load (default: all)')
    show_parser.add_argument('--format', choices=OUTPUT_FORMATS,
                             help='Output format (default: text)')

    # Config template command
    subparsers.add_parser('config-template', help='Print a starter configuration file')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Set logging level based on verbosity
    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger('xkb_data').setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)

    # Validate arguments
    if not args.command:
        parser.print_help()
        return 1

    if args.verbose and args.quiet:
        print("Error: Cannot use both --verbose and --quiet", file=sys.stderr)
        return 1

    try:
        config = load_config(
            args.config,
            rule_set=getattr(args, 'rules', None),
            output_format=getattr(args, 'format', None)
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    cli = XkbDataCLI(
        config,
        args,
        rules_paths={'base': args.base_rules, 'extras': args.extra_rules}
    )

    # Route to appropriate command
    try:
        if args.command == 'list':
            return cli.list_layouts(
                match=args.match,
                show_variants=not args.no_variants,
                output_file=args.output_file
            )

        elif args.command == 'show':
            return cli.show_layout(args.layout)

        elif args.command == 'config-template':
            return cli.config_template()

        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
