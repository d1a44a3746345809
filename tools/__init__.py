"""MCP tool registration for the Cloudinary gallery server"""
