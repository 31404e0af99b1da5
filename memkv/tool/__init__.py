"""Command line tool for inspecting memkv stores."""
