from cli.main import asset_hash_cli


if __name__ == '__main__':
    asset_hash_cli()
